# anima/core/__init__.py
"""Core module - foundational types and systems."""

from .math3d import (
    Vector3,
    Matrix4,
    Decomposition,
    lerp, clamp,
)

from .signal import (
    SignalBridge,
    Connection,
    SignalEmitter,
    SignalDebugger,
    SIGNAL_START,
    SIGNAL_END,
    SIGNAL_RENDER,
    SIGNAL_FRAME,
    SIGNAL_PLAY,
    SIGNAL_PAUSE,
    SIGNAL_RESUME,
    SIGNAL_STOP,
    SIGNAL_SEEK,
    SIGNAL_QUEUE,
)

from .config import EngineConfig, DEFAULT_CONFIG
from .errors import AnimaError, InvalidStateError, SingularMatrixError
from .frame import FrameState
from .snapshot import RenderSnapshot
from .state import TransformState
