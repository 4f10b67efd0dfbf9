# anima/animation/__init__.py
"""Animation units, the easing lookup and animated items."""

from .easing import EasingTable, DEFAULT_EASINGS, ease_linear
from .animation import Animation, AnimationUnit
from .parallel import ParallelAnimation
from .item import Item
