# anima/animation/easing.py
"""
Easing lookup.

The engine only ever calls ``resolve``; the curves themselves are data that a
host may replace or extend. Unknown names resolve to linear.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterator, Optional, Union
import logging
import math

logger = logging.getLogger(__name__)

EasingFn = Callable[[float], float]
EasingSpec = Union[str, EasingFn, None]


def ease_linear(t: float) -> float:
    return t

def ease_in_quad(t: float) -> float:
    return t * t

def ease_in_cubic(t: float) -> float:
    return t * t * t

def ease_in_quart(t: float) -> float:
    return t ** 4

def ease_in_quint(t: float) -> float:
    return t ** 5

def ease_in_expo(t: float) -> float:
    if t == 0.0:
        return 0.0
    return math.pow(2.0, 10.0 * t - 10.0)

def ease_in_sine(t: float) -> float:
    return 1.0 - math.cos(t * math.pi / 2.0)

def ease_in_circ(t: float) -> float:
    return 1.0 - math.sqrt(max(0.0, 1.0 - t * t))

def ease_in_back(t: float) -> float:
    return t * t * (3.0 * t - 2.0)


def ease_out(ease_in: EasingFn) -> EasingFn:
    def out(t: float) -> float:
        return 1.0 - ease_in(1.0 - t)
    return out


def ease_in_out(ease_in: EasingFn) -> EasingFn:
    def in_out(t: float) -> float:
        if t < 0.5:
            return ease_in(t * 2.0) / 2.0
        return 1.0 - ease_in(t * -2.0 + 2.0) / 2.0
    return in_out


BASE_CURVES: Dict[str, EasingFn] = {
    'quad': ease_in_quad,
    'cubic': ease_in_cubic,
    'quart': ease_in_quart,
    'quint': ease_in_quint,
    'expo': ease_in_expo,
    'sine': ease_in_sine,
    'circ': ease_in_circ,
    'back': ease_in_back,
}


class EasingTable:
    """Name -> easing function mapping with a linear fallback."""

    def __init__(self, curves: Optional[Dict[str, EasingFn]] = None):
        self._curves: Dict[str, EasingFn] = {'linear': ease_linear}
        if curves:
            self._curves.update(curves)

    def __contains__(self, name: str) -> bool:
        return name in self._curves

    def __iter__(self) -> Iterator[str]:
        return iter(self._curves)

    def __len__(self) -> int:
        return len(self._curves)

    def register(self, name: str, fn: EasingFn, variants: bool = False):
        """
        Add a curve. With ``variants`` the curve is treated as an ease-in and
        registered as ease-in-/ease-out-/ease-in-out-``name``.
        """
        if variants:
            self._curves[f"ease-in-{name}"] = fn
            self._curves[f"ease-out-{name}"] = ease_out(fn)
            self._curves[f"ease-in-out-{name}"] = ease_in_out(fn)
        else:
            self._curves[name] = fn

    def resolve(self, spec: EasingSpec) -> EasingFn:
        if spec is None:
            return ease_linear
        if callable(spec):
            return spec
        fn = self._curves.get(spec)
        if fn is None:
            logger.debug(f"Unknown easing {spec!r}, using linear")
            return ease_linear
        return fn

    @staticmethod
    def default() -> EasingTable:
        table = EasingTable()
        for name, fn in BASE_CURVES.items():
            table.register(name, fn, variants=True)
        return table


DEFAULT_EASINGS = EasingTable.default()
