# anima/render/sinks.py
"""
Render sinks - adapters that turn item snapshots into host output.

Sinks only see RenderSnapshot objects; they never touch live item state.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, Protocol
import numpy as np

from ..core.config import DEFAULT_CONFIG, EngineConfig
from ..core.math3d import Matrix4
from ..core.snapshot import RenderSnapshot

StyleCallback = Callable[[int, Dict[str, str]], None]


class RenderSink(Protocol):
    def submit(self, snapshot: RenderSnapshot) -> None: ...


class StyleSink:
    """
    Builds style declarations (``transform`` and ``opacity``) per item.

    With ``compact`` planar matrices use the 6-value ``matrix()`` form.
    """

    def __init__(
        self,
        apply: Optional[StyleCallback] = None,
        compact: bool = False,
        config: EngineConfig = DEFAULT_CONFIG,
    ):
        self.apply = apply
        self.compact = compact
        self.config = config
        self.styles: Dict[int, Dict[str, str]] = {}

    def style(self, snapshot: RenderSnapshot) -> Dict[str, str]:
        matrix = snapshot.get_matrix()
        eps = self.config.snap_epsilon
        if self.compact:
            transform = Matrix4.to_test_string(matrix, eps)
        else:
            transform = Matrix4.stringify(matrix, eps)
        return {'transform': transform, 'opacity': f"{snapshot.opacity:g}"}

    def submit(self, snapshot: RenderSnapshot) -> None:
        style = self.style(snapshot)
        self.styles[snapshot.index] = style
        if self.apply is not None:
            self.apply(snapshot.index, style)


class UniformSink:
    """
    Collects snapshots into a per-instance buffer for GPU upload.

    Layout per instance (stride = 80 bytes = 20 floats):
    - mat4 world (16 floats, matrix3d order is already column-major)
    - vec4 color (rgb from ``color``, alpha = item opacity)
    """

    def __init__(self, color=(1.0, 1.0, 1.0)):
        self.color = tuple(float(c) for c in color[:3])
        self.snapshots: Dict[int, RenderSnapshot] = {}

    @property
    def instance_count(self) -> int:
        return len(self.snapshots)

    def submit(self, snapshot: RenderSnapshot) -> None:
        self.snapshots[snapshot.index] = snapshot

    def clear(self):
        self.snapshots.clear()

    def build_instance_buffer(self) -> np.ndarray:
        count = len(self.snapshots)
        if count == 0:
            return np.array([], dtype=np.float32)

        buffer = np.zeros((count, 20), dtype=np.float32)

        for i, index in enumerate(sorted(self.snapshots)):
            snapshot = self.snapshots[index]
            buffer[i, :16] = snapshot.get_world_matrix().flatten()
            buffer[i, 16:19] = self.color
            buffer[i, 19] = snapshot.opacity

        return buffer.flatten()
