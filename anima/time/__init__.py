# anima/time/__init__.py
"""Schedulers and the frame source boundary."""

from .frames import FrameSource, ManualFrameSource, perf_counter_ms
from .world import Scheduler, World
from .timeline import Timeline
