# anima/core/config.py
"""
EngineConfig - tunables shared by items, animations and schedulers.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class EngineConfig:
    default_duration: int = 500       # ms, also the fallback for zero/invalid
    default_delay: int = 0            # ms
    default_easing: str = 'linear'
    snap_epsilon: float = 1e-6        # stringify snaps |v| below this to 0
    singular_epsilon: float = 1e-12   # |det| / product of row lengths below this is singular
    gimbal_epsilon: float = 1e-12     # |m[8]| within this of 1 is gimbal lock
    look_at_nudge: float = 1e-4       # z offset when up is parallel to z

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> EngineConfig:
        known = {f.name for f in fields(EngineConfig)}
        return EngineConfig(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = EngineConfig()
