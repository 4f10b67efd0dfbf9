"""
Frame State

Immutable state passed to frame listeners each tick.
Contains timing info and frame identification.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FrameState:
    """
    Immutable frame information passed to all frame listeners.
    """
    frame_id: int   # Monotonically increasing frame counter
    dt: float       # Ticks since the previous frame (ms)
    tick: float     # Tick supplied by the host (ms)

    @property
    def fps(self) -> float:
        """Estimated FPS from delta time."""
        return 1000.0 / max(1e-6, self.dt)
