"""Runtime configuration for the Hanoi visualizer.

Usage:
    from hanoi3d.config import load_config

    config = load_config(Path("configs/hanoi.yaml"))
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError


@dataclass
class HanoiConfig:
    """Knobs for the playback loop and the application around it."""
    disks: int = 3                      # Disk count used on first load
    min_disks: int = 3                  # Range enforced by the application, not the solver
    max_disks: int = 25
    step_interval: float = 1250.0       # Time units between two dispatched moves
    arc_durations: Tuple[float, float, float] = (250.0, 500.0, 250.0)  # lift, translate, lower
    smoothing: float = 0.3              # Fraction of the remaining distance covered per frame
    lift_clearance: float = 3.0         # Height above the rods at which disks travel
    fps: float = 60.0                   # Frame rate of the headless clock
    strict: bool = False                # Check the stacking rule on every push

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.min_disks < 1 or self.max_disks < self.min_disks:
            raise ConfigError(f"Invalid disk range [{self.min_disks}, {self.max_disks}]")
        if not self.min_disks <= self.disks <= self.max_disks:
            raise ConfigError(
                f"Initial disk count {self.disks} outside [{self.min_disks}, {self.max_disks}]"
            )
        if self.step_interval <= 0:
            raise ConfigError(f"step_interval must be positive, got {self.step_interval}")
        if len(self.arc_durations) != 3 or any(d < 0 for d in self.arc_durations):
            raise ConfigError(f"arc_durations needs three non-negative values, got {self.arc_durations}")
        if not 0.0 < self.smoothing <= 1.0:
            raise ConfigError(f"smoothing must be in (0, 1], got {self.smoothing}")
        if self.fps <= 0:
            raise ConfigError(f"fps must be positive, got {self.fps}")

    @property
    def frame_interval(self) -> float:
        """Time units between two frames of the headless clock (milliseconds)."""
        return 1000.0 / self.fps

    def clamp_disks(self, n: int) -> int:
        return max(self.min_disks, min(self.max_disks, int(n)))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "disks": self.disks,
            "min_disks": self.min_disks,
            "max_disks": self.max_disks,
            "step_interval": self.step_interval,
            "arc_durations": list(self.arc_durations),
            "smoothing": self.smoothing,
            "lift_clearance": self.lift_clearance,
            "fps": self.fps,
            "strict": self.strict,
        }

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "HanoiConfig":
        d = dict(d or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        try:
            if "arc_durations" in d:
                d["arc_durations"] = tuple(float(v) for v in d["arc_durations"])
            for key in ("disks", "min_disks", "max_disks"):
                if key in d:
                    d[key] = int(d[key])
            for key in ("step_interval", "smoothing", "lift_clearance", "fps"):
                if key in d:
                    d[key] = float(d[key])
            if "strict" in d:
                d["strict"] = bool(d["strict"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e
        return cls(**d)


def load_config(path: Path) -> HanoiConfig:
    """Load a config from a YAML file. An empty file gives the defaults."""
    try:
        with open(path) as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e
    if payload is not None and not isinstance(payload, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(payload).__name__}")
    return HanoiConfig.from_dict(payload)


def save_config(config: HanoiConfig, path: Path) -> None:
    with open(path, "w") as f:
        yaml.dump(config.as_dict(), f, default_flow_style=False, sort_keys=False)
