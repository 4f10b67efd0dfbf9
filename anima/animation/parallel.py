# anima/animation/parallel.py
"""
ParallelAnimation - animations sharing one start tick.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence
import logging

from ..core.config import DEFAULT_CONFIG, EngineConfig
from ..core.signal import SIGNAL_START, SIGNAL_END
from .animation import Animation, AnimationUnit, coerce_duration, split_descriptor
from .easing import DEFAULT_EASINGS, EasingSpec, EasingTable

if TYPE_CHECKING:
    from .item import Item

logger = logging.getLogger(__name__)


def _child_duration(value: Any, group: Any) -> Any:
    """A missing, zero or unusable child duration falls back to the group's."""
    return value if coerce_duration(value, 0) > 0 else group


class ParallelAnimation(AnimationUnit):
    """
    A fixed set of animations started together.

    Each child keeps its own delay, duration and easing, falling back to the
    group values passed here. The group lasts until its longest child ends.
    """

    def __init__(
        self,
        item: Item,
        descriptors: Sequence[Mapping[str, Any]],
        duration: Any = None,
        ease: EasingSpec = None,
        delay: Any = None,
        config: EngineConfig = DEFAULT_CONFIG,
        easings: EasingTable = DEFAULT_EASINGS,
    ):
        if not descriptors:
            raise ValueError("ParallelAnimation needs at least one descriptor")

        self.item = item
        self.animations: List[Animation] = []
        for descriptor in descriptors:
            transform, timing = split_descriptor(descriptor)
            self.animations.append(Animation(
                item,
                transform,
                _child_duration(timing.get('duration'), duration),
                timing.get('ease', ease),
                timing.get('delay', delay),
                config=config,
                easings=easings,
            ))

        self.start: Optional[float] = None
        self.delay = 0
        self.duration = max(a.delay + a.duration for a in self.animations)
        self._live: List[Animation] = []
        self._elapsed: Optional[float] = None

    def __repr__(self) -> str:
        return f"ParallelAnimation({len(self.animations)} animations, duration={self.duration})"

    def init(self, tick: float, force: bool = False):
        if self.start is not None and not force:
            return
        self.start = tick
        self._elapsed = None
        self._live = list(self.animations)
        for a in self._live:
            a.init(tick, force=True)
        logger.debug(f"Parallel start at {tick}: {self!r}")
        self.emit(SIGNAL_START, self)

    def run(self, tick: float):
        for a in list(self._live):
            if a.is_due(tick):
                self._live.remove(a)
                a.end()
                continue
            a.run(tick)

    def pause(self, tick: float):
        if self.start is None:
            return
        self._elapsed = tick - self.start
        for a in self._live:
            a.pause(tick)

    def resume(self, tick: float):
        if self._elapsed is None:
            return
        self.start = tick - self._elapsed
        self._elapsed = None
        for a in self._live:
            a.resume(tick)

    def end(self, abort: bool = False):
        remaining = self._live if self.start is not None else self.animations
        for a in remaining:
            a.end(abort)
        self._live = []
        self.start = None
        self._elapsed = None
        self.emit(SIGNAL_END, self, abort)
