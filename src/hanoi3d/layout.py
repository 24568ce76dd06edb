"""Scene geometry derived from the disk count.

Every dimension scales with the number of disks so that a 3-disk and a
25-disk puzzle both fill roughly the same view.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .disk import Point

DISK_COLORS: Tuple[int, ...] = (0x59B5D9, 0xFF5966, 0xFFDE59, 0x77BF56, 0xCEF19E)
ROD_COLOR = 0xD2D1D6
BASE_COLOR = 0x848484

DISK_TUBE = 1.0
ROD_RADIUS = 0.25
LIFT_CLEARANCE = 3.0


def gap_size(n: int) -> float:
    """Distance between neighbouring rods."""
    return 10 * n / 3


def rod_height(n: int) -> float:
    return 2 * n - (n - 1) * 0.75


def disk_unit(n: int) -> float:
    """Radius of the smallest disk; rank r has radius ``(r + 1) * unit``."""
    return ((gap_size(n) - 3) / 2) / n


def slot_position(row: int, col: int, n: int) -> Point:
    """Centre of the ``row``-th disk from the bottom on rod column ``col``."""
    gap = gap_size(n)
    return (-gap + col * gap, row * 2 + 1 - row * 0.75, 0.0)


@dataclass(frozen=True)
class Layout:
    disks: int
    lift_clearance: float = LIFT_CLEARANCE

    @classmethod
    def for_disks(cls, n: int, lift_clearance: float = LIFT_CLEARANCE) -> "Layout":
        if n < 1:
            raise ValueError(f"Layout needs at least one disk, got {n}")
        return cls(n, lift_clearance)

    @property
    def gap(self) -> float:
        return gap_size(self.disks)

    @property
    def rod_height(self) -> float:
        return rod_height(self.disks)

    @property
    def lift_height(self) -> float:
        return self.rod_height + self.lift_clearance

    def slot_position(self, row: int, col: int) -> Point:
        return slot_position(row, col, self.disks)

    def rod_position(self, col: int) -> Point:
        """Centre of the rod cylinder."""
        return (-self.gap + col * self.gap, self.rod_height / 2, 0.0)

    def disk_radius(self, rank: int) -> float:
        return disk_unit(self.disks) * (rank + 1)

    def disk_color(self, row: int) -> int:
        """Palette colour for the disk initially at stack ``row``."""
        return DISK_COLORS[row % len(DISK_COLORS)]

    @property
    def base_size(self) -> Point:
        return (self.gap * 3 + 4, 2.0, self.gap + 4)

    @property
    def base_center(self) -> Point:
        return (0.0, -1.0, 0.0)

    @property
    def camera_position(self) -> Point:
        return (0.0, self.rod_height, self.gap * 2 + 10)
