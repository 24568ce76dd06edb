# src/hanoi3d/__init__.py
"""
Tower of Hanoi playback core.

A solver producing the optimal move plan, a tower-state model, and a
frame-driven scheduler that replays the plan as animated disk arcs.
Rendering lives in ``hanoi3d.viz`` and is imported separately.
"""

from .errors import ConfigError, EmptyRodError, HanoiError, InvalidDiskCount, StackingViolation
from .solver import Move, Plan, Rod, iter_moves, move_count, solve
from .towers import TowerSnapshot, TowerState
from .disk import AnimatedDisk, DiskLike, Keyframe, build_arc
from .layout import Layout
from .config import HanoiConfig, load_config
from .scheduler import PlaybackEvent, PlaybackScheduler, PlaybackState, transition
from .logger import RunLogger
from .app import HanoiApp

__all__ = [
    # Solver
    "Rod", "Move", "Plan", "solve", "iter_moves", "move_count",
    # State and playback
    "TowerState", "TowerSnapshot", "PlaybackScheduler", "PlaybackState", "PlaybackEvent", "transition",
    "AnimatedDisk", "DiskLike", "Keyframe", "build_arc", "Layout",
    # Application
    "HanoiApp", "HanoiConfig", "load_config", "RunLogger",
    # Errors
    "HanoiError", "InvalidDiskCount", "EmptyRodError", "StackingViolation", "ConfigError",
]
