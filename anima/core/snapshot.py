# anima/core/snapshot.py
"""
Render snapshots - the frozen per-item output handed to render sinks.

A snapshot carries everything a sink needs (matrix and opacity) so that
sinks never read live item state.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np

from .math3d import Matrix4


@dataclass(frozen=True)
class RenderSnapshot:
    """
    Immutable render output of one item at one tick.
    """
    index: int                   # Registration order inside the scheduler
    tick: float
    matrix: Tuple[float, ...]    # 16 values, matrix3d layout
    opacity: float

    def __post_init__(self):
        assert isinstance(self.matrix, tuple) and len(self.matrix) == 16

    def get_matrix(self) -> Matrix4:
        return Matrix4(self.matrix)

    def get_world_matrix(self) -> np.ndarray:
        """4x4 float32 array for GPU upload."""
        return np.array(self.matrix, dtype=np.float32).reshape(4, 4)

    @staticmethod
    def capture(index: int, tick: float, matrix: Matrix4, opacity: float) -> RenderSnapshot:
        return RenderSnapshot(
            index=index,
            tick=float(tick),
            matrix=matrix.to_tuple(),
            opacity=float(opacity),
        )
