# anima/core/state.py
"""
TransformState - the animatable fields of a single item.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence
import math

from .math3d import Matrix4

VECTOR_FIELDS = ('translate', 'rotate', 'scale')


def _checked(values: Sequence[float], name: str) -> List[float]:
    if len(values) != 3:
        raise ValueError(f"{name} needs 3 components, got {len(values)}")
    result = [float(v) for v in values]
    if not all(math.isfinite(v) for v in result):
        raise ValueError(f"{name} must be finite, got {result}")
    return result


@dataclass
class TransformState:
    """Translation, Euler rotation (degrees), scale and opacity."""
    translate: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotate: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    scale: List[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])
    opacity: float = 1.0

    def clear(self):
        self.translate = [0.0, 0.0, 0.0]
        self.rotate = [0.0, 0.0, 0.0]
        self.scale = [1.0, 1.0, 1.0]
        self.opacity = 1.0

    def copy(self) -> TransformState:
        return TransformState(
            translate=list(self.translate),
            rotate=list(self.rotate),
            scale=list(self.scale),
            opacity=self.opacity,
        )

    def add(self, name: str, values: Sequence[float]):
        current = self.get(name)
        delta = _checked(values, name)
        self.set(name, [c + d for c, d in zip(current, delta)])

    def set(self, name: str, values: Sequence[float]):
        if name not in VECTOR_FIELDS:
            raise ValueError(f"unknown transform field {name!r}")
        setattr(self, name, _checked(values, name))

    def get(self, name: str) -> List[float]:
        if name not in VECTOR_FIELDS:
            raise ValueError(f"unknown transform field {name!r}")
        return getattr(self, name)

    def set_opacity(self, value: float):
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"opacity must be finite, got {value}")
        self.opacity = value

    def matrix(self) -> Matrix4:
        return Matrix4.compose(self.translate, self.rotate, self.scale)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'translate': list(self.translate),
            'rotate': list(self.rotate),
            'scale': list(self.scale),
            'opacity': self.opacity,
        }
