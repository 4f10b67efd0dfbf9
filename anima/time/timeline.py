# anima/time/timeline.py
"""
Timeline - scrubbable scheduler with its own virtual clock.

The host tick only measures how much real time passed while playing; items
are always driven by ``current_time`` through ``Item.seek``.
"""

from __future__ import annotations
from typing import Any, List, Optional
import logging

from ..animation.easing import DEFAULT_EASINGS, EasingTable
from ..animation.item import Item
from ..core.config import DEFAULT_CONFIG, EngineConfig
from ..core.signal import SIGNAL_FRAME, SIGNAL_PLAY, SIGNAL_PAUSE, SIGNAL_QUEUE, SIGNAL_STOP, SIGNAL_SEEK
from ..core.snapshot import RenderSnapshot
from .frames import FrameSource
from .world import Scheduler

logger = logging.getLogger(__name__)


class Timeline(Scheduler):
    """Virtual-clock scheduler supporting play, pause, stop and seek."""

    def __init__(
        self,
        frames: Optional[FrameSource] = None,
        start: bool = False,
        duration: Optional[float] = None,
        loop: bool = False,
        sink=None,
        config: EngineConfig = DEFAULT_CONFIG,
        easings: EasingTable = DEFAULT_EASINGS,
    ):
        super().__init__(frames, sink=sink, config=config, easings=easings)
        self.current_time: float = 0.0
        self.running: bool = False
        self.loop: bool = loop
        self._duration = duration
        self._dirty: bool = True
        self._origin: Optional[float] = None
        if start:
            self.start()

    @property
    def duration(self) -> float:
        """Explicit duration, else the longest item queue."""
        if self._duration is not None:
            return self._duration
        return max((item.total_duration() for item in self.items), default=0)

    @property
    def dirty(self) -> bool:
        return self._dirty

    def add(self, target: Any = None) -> Item:
        """Register an item; queue changes on it force a reseek on the next frame."""
        item = super().add(target)
        item.on(SIGNAL_QUEUE, self._queue_changed)
        self._dirty = True
        return item

    def _queue_changed(self, item: Item):
        self._dirty = True

    def update(self, tick: float) -> List[RenderSnapshot]:
        frame = self._next_frame_state(tick)

        if self.running:
            if self._origin is None:
                self._origin = tick - self.current_time
            self.current_time = tick - self._origin
            self._wrap(tick)
            self._dirty = True

        if self._dirty:
            snapshots = [item.timeline(self.current_time) for item in self.items]
            self._dirty = False
        else:
            snapshots = [item.render(self.current_time) for item in self.items]

        self.emit(SIGNAL_FRAME, frame)
        return snapshots

    def _wrap(self, tick: float):
        duration = self.duration
        if duration <= 0 or self.current_time < duration:
            return
        if self.loop:
            self.current_time %= duration
            self._origin = tick - self.current_time
        else:
            self.current_time = duration
            self.running = False
            self._origin = None
            logger.debug(f"Timeline reached its end at {duration}")
            self.emit(SIGNAL_PAUSE, self.current_time)

    def play(self):
        self.start()
        if self.running:
            return
        self.running = True
        self._origin = None
        logger.debug(f"Timeline play from {self.current_time}")
        self.emit(SIGNAL_PLAY, self.current_time)

    def pause(self):
        if not self.running:
            return
        self.running = False
        self._origin = None
        logger.debug(f"Timeline paused at {self.current_time}")
        self.emit(SIGNAL_PAUSE, self.current_time)

    def stop(self):
        self.running = False
        self.current_time = 0.0
        self._origin = None
        self._dirty = True
        logger.debug("Timeline stopped")
        self.emit(SIGNAL_STOP)

    def seek(self, time: float):
        self.current_time = max(0.0, float(time))
        self._origin = None
        self._dirty = True
        self.emit(SIGNAL_SEEK, self.current_time)
