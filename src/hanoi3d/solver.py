"""Move generation for the three-rod Tower of Hanoi."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Sequence, Tuple, Union

import numpy as np


class Rod(Enum):
    A = "A"  # home rod
    B = "B"  # auxiliary
    C = "C"  # default target

    @property
    def column(self) -> int:
        """Left-to-right slot index of the rod in the scene (A=0, B=1, C=2)."""
        return _COLUMNS[self]

    @classmethod
    def from_column(cls, column: int) -> "Rod":
        return ROD_ORDER[column]

    @classmethod
    def parse(cls, label: Union[str, "Rod"]) -> "Rod":
        if isinstance(label, Rod):
            return label
        try:
            return cls(str(label).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown rod label: {label!r}") from None


ROD_ORDER: Tuple[Rod, ...] = (Rod.A, Rod.B, Rod.C)
_COLUMNS: Dict[Rod, int] = {rod: idx for idx, rod in enumerate(ROD_ORDER)}


class Move(NamedTuple):
    source: Rod
    target: Rod

    def __str__(self) -> str:
        return f"{self.source.value}->{self.target.value}"


# Only six distinct moves exist; plans hand out these shared instances.
_MOVES: Dict[Tuple[int, int], Move] = {
    (s.column, t.column): Move(s, t) for s in ROD_ORDER for t in ROD_ORDER if s is not t
}


def move_count(n: int) -> int:
    """Length of the optimal solution for n disks."""
    _check_disks(n)
    return (1 << n) - 1


def _check_disks(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"Disk count must be an integer, got {n!r}")
    if n < 0:
        raise ValueError(f"Disk count must be non-negative, got {n}")


def _check_rods(source: Rod, target: Rod, auxiliary: Rod) -> None:
    rods = (source, target, auxiliary)
    if not all(isinstance(r, Rod) for r in rods):
        raise ValueError(f"Rods must be Rod members, got {rods!r}")
    if len(set(rods)) != 3:
        raise ValueError(f"Source, target and auxiliary must be distinct, got {rods!r}")


def iter_moves(
    n: int,
    source: Rod = Rod.A,
    target: Rod = Rod.C,
    auxiliary: Rod = Rod.B,
) -> Iterator[Move]:
    """Yield the optimal moves lazily.

    Recursion is replaced by a worklist of (n, source, target, auxiliary)
    frames; a frame expands into "n-1 to auxiliary", "emit", "n-1 to target"
    pushed in reverse so they pop in order.
    """
    _check_disks(n)
    _check_rods(source, target, auxiliary)

    work: List[Union[Move, Tuple[int, Rod, Rod, Rod]]] = [(n, source, target, auxiliary)]
    while work:
        frame = work.pop()
        if isinstance(frame, Move):
            yield frame
            continue
        k, src, dst, aux = frame
        if k == 0:
            continue
        work.append((k - 1, aux, dst, src))
        work.append(_MOVES[(src.column, dst.column)])
        work.append((k - 1, src, aux, dst))


# Canonical labels: 0 = source, 1 = auxiliary, 2 = target.
# First half of solve(k) is solve(k-1) with auxiliary and target swapped,
# second half is solve(k-1) with source and auxiliary swapped.
_FIRST_HALF = np.array([0, 2, 1], dtype=np.uint8)
_SECOND_HALF = np.array([1, 0, 2], dtype=np.uint8)
_CENTRE = np.array([[0, 2]], dtype=np.uint8)


def _canonical_moves(n: int) -> np.ndarray:
    moves = np.empty((0, 2), dtype=np.uint8)
    for _ in range(n):
        moves = np.concatenate((_FIRST_HALF[moves], _CENTRE, _SECOND_HALF[moves]))
    return moves


@dataclass(frozen=True, eq=False)
class Plan(Sequence[Move]):
    """Immutable, indexable sequence of moves for one puzzle load.

    Moves are held as an (M, 2) read-only array of rod columns; indexing
    returns the shared Move tuples.
    """

    disks: int
    source: Rod
    target: Rod
    auxiliary: Rod
    columns: np.ndarray = field(repr=False)

    def __len__(self) -> int:
        return int(self.columns.shape[0])

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        src, dst = self.columns[index]
        return _MOVES[(int(src), int(dst))]

    def __iter__(self) -> Iterator[Move]:
        for src, dst in self.columns:
            yield _MOVES[(int(src), int(dst))]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Plan):
            return NotImplemented
        return (
            (self.disks, self.source, self.target, self.auxiliary)
            == (other.disks, other.source, other.target, other.auxiliary)
            and np.array_equal(self.columns, other.columns)
        )

    __hash__ = None  # type: ignore[assignment]


def spare_rod(source: Rod, target: Rod) -> Rod:
    """The third rod, used as auxiliary when moving from source to target."""
    if source is target:
        raise ValueError(f"Source and target must differ, got {source.value} twice")
    # columns are 0, 1, 2
    return Rod.from_column(3 - source.column - target.column)


def solve(
    n: int,
    source: Rod = Rod.A,
    target: Rod = Rod.C,
    auxiliary: Rod = Rod.B,
) -> Plan:
    """Return the optimal plan moving n disks from source to target."""
    _check_disks(n)
    _check_rods(source, target, auxiliary)

    relabel = np.array([source.column, auxiliary.column, target.column], dtype=np.uint8)
    columns = relabel[_canonical_moves(int(n))]
    columns.setflags(write=False)
    return Plan(int(n), source, target, auxiliary, columns)
