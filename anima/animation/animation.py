# anima/animation/animation.py
"""
Animation - one timed interpolation of some of an item's fields.

Vector fields (translate, rotate, scale) are deltas added to the state the
item had when the animation started; opacity is an absolute target.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence, Tuple
import logging
import math

from ..core.config import DEFAULT_CONFIG, EngineConfig
from ..core.errors import InvalidStateError
from ..core.math3d import lerp
from ..core.signal import SignalEmitter, SIGNAL_START, SIGNAL_END
from ..core.state import TransformState, VECTOR_FIELDS
from .easing import DEFAULT_EASINGS, EasingSpec, EasingTable

if TYPE_CHECKING:
    from .item import Item

logger = logging.getLogger(__name__)

Delta = Tuple[float, float, float]


# =============================================================================
# Descriptor helpers
# =============================================================================

def coerce_duration(value: Any, fallback: int) -> int:
    """Whole milliseconds; zero, negative or unparsable values use ``fallback``."""
    try:
        ms = int(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    return ms if ms > 0 else fallback


def coerce_delay(value: Any, fallback: int = 0) -> int:
    try:
        ms = int(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    return max(0, ms)


def _delta(values: Optional[Sequence[float]], name: str) -> Optional[Delta]:
    if values is None:
        return None
    if len(values) != 3:
        raise ValueError(f"{name} needs 3 components, got {len(values)}")
    result = tuple(float(v) for v in values)
    if not all(math.isfinite(v) for v in result):
        raise ValueError(f"{name} must be finite, got {result}")
    return result


def split_descriptor(descriptor: Mapping[str, Any]) -> Tuple[Mapping[str, Any], Mapping[str, Any]]:
    """
    Separate a unit descriptor into its transform fields and its timing.

    Transform fields may sit at the top level or in a nested ``transform``
    mapping.
    """
    transform = descriptor.get('transform') or {
        key: descriptor[key]
        for key in (*VECTOR_FIELDS, 'opacity')
        if key in descriptor
    }
    timing = {
        key: descriptor[key]
        for key in ('duration', 'delay', 'ease')
        if descriptor.get(key) is not None
    }
    return transform, timing


# =============================================================================
# Unit interface
# =============================================================================

class AnimationUnit(SignalEmitter, ABC):
    """What an item's queue holds: a single or a parallel animation."""

    item: Item
    start: Optional[float]
    delay: int
    duration: int

    @abstractmethod
    def init(self, tick: float, force: bool = False): ...

    @abstractmethod
    def run(self, tick: float): ...

    @abstractmethod
    def pause(self, tick: float): ...

    @abstractmethod
    def resume(self, tick: float): ...

    @abstractmethod
    def end(self, abort: bool = False): ...

    def is_due(self, tick: float) -> bool:
        """True once the unit's window has fully elapsed at ``tick``."""
        return self.start is not None and self.start + self.duration <= tick

    def animate(self, *args, **kwargs) -> AnimationUnit:
        """Queue another unit on the same item."""
        return self.item.animate(*args, **kwargs)

    def infinite(self) -> AnimationUnit:
        self.item.infinite = True
        return self


# =============================================================================
# Animation
# =============================================================================

class Animation(AnimationUnit):
    """Single timed interpolation."""

    def __init__(
        self,
        item: Item,
        transform: Mapping[str, Any],
        duration: Any = None,
        ease: EasingSpec = None,
        delay: Any = None,
        config: EngineConfig = DEFAULT_CONFIG,
        easings: EasingTable = DEFAULT_EASINGS,
    ):
        self.item = item

        self.translate = _delta(transform.get('translate'), 'translate')
        self.rotate = _delta(transform.get('rotate'), 'rotate')
        self.scale = _delta(transform.get('scale'), 'scale')

        opacity = transform.get('opacity')
        if opacity is not None:
            opacity = float(opacity)
            if not math.isfinite(opacity):
                raise ValueError(f"opacity must be finite, got {opacity}")
        self.opacity = opacity

        self.duration = coerce_duration(duration, config.default_duration)
        self.delay = coerce_delay(delay, config.default_delay)
        self.ease_name = ease if isinstance(ease, str) else None
        self.easing = easings.resolve(config.default_easing if ease is None else ease)

        self.start: Optional[float] = None
        self.initial: Optional[TransformState] = None
        self._elapsed: Optional[float] = None

    def __repr__(self) -> str:
        fields = {
            name: getattr(self, name)
            for name in (*VECTOR_FIELDS, 'opacity')
            if getattr(self, name) is not None
        }
        return f"Animation({fields}, duration={self.duration}, delay={self.delay})"

    def init(self, tick: float, force: bool = False):
        if self.start is not None and not force:
            return
        self.start = tick + self.delay
        self.initial = self.item.state.copy()
        self._elapsed = None
        logger.debug(f"Animation start at {self.start}: {self!r}")
        self.emit(SIGNAL_START, self)

    def run(self, tick: float):
        if self.start is None:
            raise InvalidStateError("run() called before init()")
        if tick < self.start:
            return
        self.transform(self.easing((tick - self.start) / self.duration))

    def transform(self, percent: float):
        if self.initial is None:
            raise InvalidStateError("transform() called before init()")
        state, initial = self.item.state, self.initial

        for name in VECTOR_FIELDS:
            delta = getattr(self, name)
            if delta and any(delta):
                base = getattr(initial, name)
                setattr(state, name, [base[i] + delta[i] * percent for i in range(3)])

        if self.opacity is not None:
            state.opacity = lerp(initial.opacity, self.opacity, percent)

    def end(self, abort: bool = False):
        if not abort:
            if self.start is None:
                # finishing a unit that never ran applies it to the current state
                self.initial = self.item.state.copy()
            self.transform(1.0)
        self.start = None
        self._elapsed = None
        logger.debug(f"Animation {'aborted' if abort else 'ended'}: {self!r}")
        self.emit(SIGNAL_END, self, abort)

    def pause(self, tick: float):
        if self.start is None:
            return
        self._elapsed = tick - self.start

    def resume(self, tick: float):
        if self._elapsed is None:
            return
        self.start = tick - self._elapsed
        self._elapsed = None
