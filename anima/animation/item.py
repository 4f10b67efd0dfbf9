# anima/animation/item.py
"""
Item - an animated object: its transform state plus a queue of units.

Two playback paths share the queue:

* ``advance(tick)`` moves forward only, progressing just the queue head.
* ``seek(tick)`` rebuilds the state from scratch by replaying the queue from
  a cleared state, so any tick (earlier ones included) can be reached.
"""

from __future__ import annotations
from collections import deque
from typing import Any, Deque, Mapping, Optional, Sequence, Union
import logging

from ..core.config import DEFAULT_CONFIG, EngineConfig
from ..core.errors import InvalidStateError
from ..core.math3d import Decomposition, Matrix4
from ..core.signal import (
    SignalEmitter,
    SIGNAL_QUEUE, SIGNAL_RENDER, SIGNAL_PAUSE, SIGNAL_RESUME, SIGNAL_STOP,
)
from ..core.snapshot import RenderSnapshot
from ..core.state import TransformState
from .animation import Animation, AnimationUnit, split_descriptor
from .easing import DEFAULT_EASINGS, EasingSpec, EasingTable
from .parallel import ParallelAnimation

logger = logging.getLogger(__name__)

Descriptor = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]

UP = (0.0, 1.0, 0.0)


class Item(SignalEmitter):
    """Transform state driven by a FIFO queue of animation units."""

    def __init__(
        self,
        target: Any = None,
        index: int = 0,
        sink=None,
        config: EngineConfig = DEFAULT_CONFIG,
        easings: EasingTable = DEFAULT_EASINGS,
    ):
        self.target = target
        self.index = index
        self.sink = sink
        self.config = config
        self.easings = easings

        self.state = TransformState()
        self.animations: Deque[AnimationUnit] = deque()
        self.running: bool = True
        self.infinite: bool = False

        self._last_tick: Optional[float] = None
        self._resume_pending: bool = False

    def __repr__(self) -> str:
        return f"Item(index={self.index}, queued={len(self.animations)}, running={self.running})"

    # =========================================================================
    # Frame entry points
    # =========================================================================

    def update(self, tick: float) -> RenderSnapshot:
        """Free-running frame: advance the queue head, then render."""
        self.advance(tick)
        return self.render(tick)

    def timeline(self, tick: float) -> RenderSnapshot:
        """Timeline frame: replay the queue up to ``tick``, then render."""
        if self.animations:
            self.seek(tick)
        return self.render(tick)

    def snapshot(self, tick: float) -> RenderSnapshot:
        return RenderSnapshot.capture(self.index, tick, self.matrix(), self.state.opacity)

    def render(self, tick: float) -> RenderSnapshot:
        snapshot = self.snapshot(tick)
        if self.sink is not None:
            self.sink.submit(snapshot)
        self.emit(SIGNAL_RENDER, self, snapshot)
        return snapshot

    # =========================================================================
    # Playback
    # =========================================================================

    def advance(self, tick: float):
        self._last_tick = tick
        if not self.running or not self.animations:
            return

        if self._resume_pending:
            self._resume_pending = False
            self.animations[0].resume(tick)

        while self.animations:
            head = self.animations[0]
            head.init(tick)
            if head.is_due(tick):
                self.animations.popleft()
                if self.infinite:
                    self.animations.append(head)
                head.end()
                continue
            head.run(tick)
            break

    def seek(self, tick: float):
        if not self.animations:
            raise InvalidStateError("seek() on an item with no queued animations")

        logger.debug(f"{self!r} seek to {tick}")
        self.state.clear()
        time = 0
        for unit in list(self.animations):
            unit.init(time, force=True)
            if unit.is_due(tick):
                unit.end()
                time += unit.delay + unit.duration
                continue
            unit.run(tick)
            break

    def pause(self, tick: Optional[float] = None):
        if not self.running:
            return
        tick = self._last_tick if tick is None else tick
        if self.animations and tick is not None:
            self.animations[0].pause(tick)
        self.running = False
        self._resume_pending = False
        logger.debug(f"{self!r} paused at {tick}")
        self.emit(SIGNAL_PAUSE, tick)

    def resume(self, tick: Optional[float] = None):
        """
        Continue the queue head from where it was paused. Without ``tick``
        the head is re-anchored on the next ``advance``.
        """
        if self.running:
            return
        if self.animations:
            if tick is None:
                self._resume_pending = True
            else:
                self.animations[0].resume(tick)
        self.running = True
        logger.debug(f"{self!r} resumed")
        self.emit(SIGNAL_RESUME)

    def finish(self, abort: bool = False) -> Item:
        for unit in list(self.animations):
            unit.end(abort)
        self.animations.clear()
        self.infinite = False
        self._resume_pending = False
        self.emit(SIGNAL_QUEUE, self)
        return self

    def stop(self) -> Item:
        self.finish(abort=True)
        self.emit(SIGNAL_STOP)
        return self

    def total_duration(self) -> int:
        """Length of one pass through the queue, delays included."""
        return sum(unit.delay + unit.duration for unit in self.animations)

    # =========================================================================
    # Queue building
    # =========================================================================

    def animate(
        self,
        transform: Descriptor,
        duration: Any = None,
        ease: EasingSpec = None,
        delay: Any = None,
    ) -> AnimationUnit:
        """
        Queue a unit. A list of descriptors becomes a ParallelAnimation;
        timing found inside a descriptor wins over the arguments.
        """
        if isinstance(transform, (list, tuple)):
            unit = ParallelAnimation(
                self, transform, duration, ease, delay,
                config=self.config, easings=self.easings,
            )
        else:
            fields, timing = split_descriptor(transform)
            unit = Animation(
                self,
                fields,
                timing.get('duration', duration),
                timing.get('ease', ease),
                timing.get('delay', delay),
                config=self.config,
                easings=self.easings,
            )
        self.animations.append(unit)
        self.emit(SIGNAL_QUEUE, self)
        return unit

    # =========================================================================
    # Direct state access
    # =========================================================================

    def add(self, name: str, values: Sequence[float]) -> Item:
        self.state.add(name, values)
        return self

    def set(self, name: str, values: Sequence[float]) -> Item:
        self.state.set(name, values)
        return self

    def translate(self, t: Sequence[float]) -> Item:
        return self.add('translate', t)

    def rotate(self, r: Sequence[float]) -> Item:
        """Add Euler angles in degrees."""
        return self.add('rotate', r)

    def scale(self, s: Sequence[float]) -> Item:
        return self.add('scale', s)

    def clear(self) -> Item:
        self.state.clear()
        return self

    @property
    def opacity(self) -> float:
        return self.state.opacity

    @opacity.setter
    def opacity(self, value: float):
        self.state.set_opacity(value)

    def matrix(self) -> Matrix4:
        return self.state.matrix()

    def center(self) -> Decomposition:
        """Transform that brings the item back to the origin."""
        return Matrix4.decompose(self.matrix().inverse(self.config.singular_epsilon))

    def look_at(self, vector: Sequence[float]) -> Item:
        basis = Matrix4.look_at(vector, self.state.translate, UP, nudge=self.config.look_at_nudge)
        self.state.set('rotate', Matrix4.decompose(basis).rotate)
        return self
