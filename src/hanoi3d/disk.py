# src/hanoi3d/disk.py
"""Animated disks and the keyframe arcs that move them between rods."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

import numpy as np

from .time.smoothing import SMOOTHING_FACTOR, settle_toward

Point = Tuple[float, float, float]

# lift, translate, lower
ARC_DURATIONS: Tuple[float, float, float] = (250.0, 500.0, 250.0)


class DiskLike(Protocol):
    rank: int

    def get_position(self) -> Point: ...
    def set_target(self, keyframes: Sequence["Keyframe"]) -> None:
        """Install a new arc, restarting the keyframe cursor."""
    def update(self, delta: float) -> None:
        """Advance interpolation by one frame at timestamp ``delta``."""


@dataclass(frozen=True)
class Keyframe:
    target: Point
    duration: float


def build_arc(
    start: Sequence[float],
    slot: Sequence[float],
    lift_height: float,
    durations: Sequence[float] = ARC_DURATIONS,
) -> Tuple[Keyframe, Keyframe, Keyframe]:
    """Three waypoints: straight up, across at lift height, down onto ``slot``."""
    sx, _, sz = (float(v) for v in start)
    tx, ty, tz = (float(v) for v in slot)
    lift_t, move_t, lower_t = (float(d) for d in durations)
    return (
        Keyframe((sx, float(lift_height), sz), lift_t),
        Keyframe((tx, float(lift_height), tz), move_t),
        Keyframe((tx, ty, tz), lower_t),
    )


class AnimatedDisk:
    """
    A torus-shaped disk with a rendered position and a keyframe cursor.

    ``update`` eases the position toward the current keyframe with
    exponential smoothing. A keyframe becomes current with no deadline; the
    first update that sees it sets ``deadline = delta + duration`` and the
    cursor moves on once ``delta`` reaches it, wherever the disk happens to
    be at that moment.
    """

    def __init__(
        self,
        rank: int,
        radius: float = 2.0,
        tube: float = 0.5,
        color: int = 0xF8DF35,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        eta: float = SMOOTHING_FACTOR,
    ):
        self.rank = rank
        self.radius = radius
        self.tube = tube
        self.color = color
        self.eta = eta
        self.position = np.array(position, dtype=float)
        self.keys: Tuple[Keyframe, ...] = ()
        self.key_index = 0
        self.timer: Optional[float] = None

    def __repr__(self) -> str:
        x, y, z = self.get_position()
        return f"AnimatedDisk(rank={self.rank}, position=({x:.2f}, {y:.2f}, {z:.2f}))"

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = np.array((x, y, z), dtype=float)

    def get_position(self) -> Point:
        x, y, z = self.position.tolist()
        return (x, y, z)

    def set_target(self, keyframes: Sequence[Keyframe]) -> None:
        self.keys = tuple(keyframes)
        self.key_index = 0
        self.timer = None

    @property
    def current_key(self) -> Optional[Keyframe]:
        if self.key_index < len(self.keys):
            return self.keys[self.key_index]
        return None

    @property
    def pending(self) -> bool:
        return self.current_key is not None

    def update(self, delta: float) -> None:
        key = self.current_key
        if key is None:
            return
        self.position = settle_toward(self.position, key.target, self.eta)

        if self.timer is None:
            self.timer = delta + key.duration

        if delta >= self.timer:
            self.timer = None
            self.key_index += 1
            if self.key_index >= len(self.keys):
                # arc fully consumed
                self.keys = ()
                self.key_index = 0
