# anima/time/world.py
"""
World - free-running scheduler driven by the host's frame ticks.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

from ..animation.easing import DEFAULT_EASINGS, EasingTable
from ..animation.item import Item
from ..core.config import DEFAULT_CONFIG, EngineConfig
from ..core.frame import FrameState
from ..core.signal import (
    SignalEmitter,
    SIGNAL_FRAME, SIGNAL_PAUSE, SIGNAL_RESUME, SIGNAL_STOP,
)
from ..core.snapshot import RenderSnapshot
from .frames import FrameSource, ManualFrameSource

logger = logging.getLogger(__name__)


class Scheduler(SignalEmitter, ABC):
    """Item registry plus the one-request-per-tick frame loop."""

    def __init__(
        self,
        frames: Optional[FrameSource] = None,
        sink=None,
        config: EngineConfig = DEFAULT_CONFIG,
        easings: EasingTable = DEFAULT_EASINGS,
    ):
        self.frames = frames if frames is not None else ManualFrameSource()
        self.sink = sink
        self.config = config
        self.easings = easings
        self.items: List[Item] = []

        self._frame: Optional[int] = None
        self._looping: bool = False
        self._frame_id: int = 0
        self._last_tick: Optional[float] = None

    def add(self, target: Any = None) -> Item:
        item = Item(
            target,
            index=len(self.items),
            sink=self.sink,
            config=self.config,
            easings=self.easings,
        )
        self.items.append(item)
        return item

    def start(self):
        """Begin requesting frames; a no-op while the loop is already live."""
        if self._looping:
            return
        self._looping = True
        self._frame = self.frames.request(self._on_frame)

    def cancel(self):
        """Drop the pending frame request and stop the loop."""
        if self._frame is not None:
            self.frames.cancel(self._frame)
        self._frame = None
        self._looping = False

    @property
    def looping(self) -> bool:
        return self._looping

    def _on_frame(self, tick: float):
        self._frame = None
        self.update(tick)
        if self._looping and self._frame is None:
            self._frame = self.frames.request(self._on_frame)

    def _next_frame_state(self, tick: float) -> FrameState:
        dt = 0.0 if self._last_tick is None else tick - self._last_tick
        self._last_tick = tick
        self._frame_id += 1
        return FrameState(frame_id=self._frame_id, dt=dt, tick=tick)

    @abstractmethod
    def update(self, tick: float) -> List[RenderSnapshot]: ...


class World(Scheduler):
    """
    Free-running scheduler: every item advances its own queue from the
    host tick.
    """

    def __init__(
        self,
        frames: Optional[FrameSource] = None,
        start: bool = False,
        sink=None,
        config: EngineConfig = DEFAULT_CONFIG,
        easings: EasingTable = DEFAULT_EASINGS,
    ):
        super().__init__(frames, sink=sink, config=config, easings=easings)
        if start:
            self.start()

    def update(self, tick: float) -> List[RenderSnapshot]:
        frame = self._next_frame_state(tick)
        snapshots = [item.update(tick) for item in self.items]
        self.emit(SIGNAL_FRAME, frame)
        return snapshots

    def stop(self):
        self.cancel()
        for item in self.items:
            item.stop()
        logger.debug(f"World stopped ({len(self.items)} items)")
        self.emit(SIGNAL_STOP)

    def pause(self):
        self.cancel()
        for item in self.items:
            item.pause()
        logger.debug("World paused")
        self.emit(SIGNAL_PAUSE, self._last_tick)

    def resume(self):
        for item in self.items:
            item.resume()
        self.start()
        logger.debug("World resumed")
        self.emit(SIGNAL_RESUME)
