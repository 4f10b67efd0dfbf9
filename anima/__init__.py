# anima/__init__.py
"""
anima - transform and timeline animation engine.

Core components:
- Matrix4: affine matrix algebra (compose, decompose, inverse, look-at)
- Item: transform state driven by a queue of animation units
- World: free-running scheduler
- Timeline: scrubbable scheduler with its own clock
"""

from .core import (
    Vector3,
    Matrix4,
    Decomposition,
    TransformState,
    EngineConfig,
    AnimaError,
    InvalidStateError,
    SingularMatrixError,
    FrameState,
    RenderSnapshot,
    SignalBridge,
    SignalEmitter,
    SignalDebugger,
)

from .animation import (
    Animation,
    ParallelAnimation,
    Item,
    EasingTable,
    DEFAULT_EASINGS,
)

from .time import (
    ManualFrameSource,
    World,
    Timeline,
)

from .render import StyleSink, UniformSink

__version__ = '0.1.0'

__all__ = [
    'Vector3',
    'Matrix4',
    'Decomposition',
    'TransformState',
    'EngineConfig',
    'AnimaError',
    'InvalidStateError',
    'SingularMatrixError',
    'FrameState',
    'RenderSnapshot',
    'SignalBridge',
    'SignalEmitter',
    'SignalDebugger',
    'Animation',
    'ParallelAnimation',
    'Item',
    'EasingTable',
    'DEFAULT_EASINGS',
    'ManualFrameSource',
    'World',
    'Timeline',
    'StyleSink',
    'UniformSink',
]
