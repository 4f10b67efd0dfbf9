# anima/core/errors.py
"""
Exception types raised by the engine.
"""


class AnimaError(Exception):
    """Base class for engine errors."""


class InvalidStateError(AnimaError):
    """An operation was called before its preconditions were met."""


class SingularMatrixError(InvalidStateError):
    """The 3x3 rotation/scale block has no inverse."""
