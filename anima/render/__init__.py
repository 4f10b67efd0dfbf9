# anima/render/__init__.py
"""Render sink adapters."""

from .sinks import RenderSink, StyleSink, UniformSink
