"""Tests for the tower state model."""

import dataclasses

import pytest

from hanoi3d.errors import EmptyRodError, StackingViolation
from hanoi3d.solver import Rod
from hanoi3d.towers import TowerSnapshot, TowerState


@dataclasses.dataclass
class Token:
    rank: int


def fresh(n=3, rod=Rod.A, strict=False):
    return TowerState.initial([Token(r) for r in reversed(range(n))], rod, strict=strict)


class TestStackDiscipline:
    """Push and pop only ever touch the top of a rod."""

    def test_initial_stack_is_largest_first(self):
        towers = fresh(4)
        assert towers.snapshot()[Rod.A] == (3, 2, 1, 0)
        assert towers.height(Rod.A) == 4
        assert towers.top(Rod.A).rank == 0
        assert towers.top(Rod.B) is None

    def test_pop_returns_top(self):
        towers = fresh(3)
        disk = towers.pop_top(Rod.A)
        assert disk.rank == 0
        towers.push_top(Rod.C, disk)
        assert towers.snapshot().as_dict() == {"A": [2, 1], "B": [], "C": [0]}

    def test_pop_empty_rod_raises(self):
        towers = fresh(3)
        with pytest.raises(EmptyRodError) as exc:
            towers.pop_top(Rod.B)
        assert exc.value.rod is Rod.B
        # also an IndexError, like popping an empty list
        assert isinstance(exc.value, IndexError)

    def test_push_is_unchecked_by_default(self):
        towers = fresh(3)
        towers.push_top(Rod.A, Token(5))
        assert towers.snapshot()[Rod.A] == (2, 1, 0, 5)
        with pytest.raises(StackingViolation):
            towers.check_invariants()

    def test_strict_push_rejects_larger_on_smaller(self):
        towers = fresh(3, strict=True)
        small = towers.pop_top(Rod.A)
        towers.push_top(Rod.C, small)
        middle = towers.pop_top(Rod.A)
        with pytest.raises(StackingViolation):
            towers.push_top(Rod.C, middle)

    def test_strict_initial_rejects_unsorted_stack(self):
        with pytest.raises(StackingViolation):
            TowerState.initial([Token(0), Token(1)], Rod.A, strict=True)

    def test_disks_iterates_rod_by_rod(self):
        towers = fresh(3)
        towers.push_top(Rod.C, towers.pop_top(Rod.A))
        assert [d.rank for d in towers.disks()] == [2, 1, 0]
        assert len(towers) == 3


class TestInvariants:
    def test_valid_state_passes(self):
        towers = fresh(5)
        towers.push_top(Rod.B, towers.pop_top(Rod.A))
        towers.check_invariants()

    def test_duplicate_rank_detected(self):
        towers = TowerState()
        towers.push_top(Rod.A, Token(1))
        towers.push_top(Rod.B, Token(1))
        with pytest.raises(StackingViolation):
            towers.check_invariants()

    def test_missing_rank_detected(self):
        towers = TowerState()
        towers.push_top(Rod.A, Token(2))
        towers.push_top(Rod.A, Token(0))
        with pytest.raises(StackingViolation):
            towers.check_invariants()


class TestSnapshot:
    def test_snapshot_is_read_only(self):
        snap = fresh(3).snapshot()
        assert isinstance(snap, TowerSnapshot)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.rods = ((), (), ())  # type: ignore[misc]
        assert isinstance(snap[Rod.A], tuple)

    def test_snapshot_does_not_follow_later_moves(self):
        towers = fresh(3)
        snap = towers.snapshot()
        towers.push_top(Rod.C, towers.pop_top(Rod.A))
        assert snap[Rod.A] == (2, 1, 0)
        assert towers.snapshot()[Rod.A] == (2, 1)

    def test_solved_on(self):
        snap = fresh(3, rod=Rod.C).snapshot()
        assert snap.is_solved_on(Rod.C)
        assert not snap.is_solved_on(Rod.A)
        assert snap.disks == 3

    def test_ascii_rendering(self):
        lines = str(fresh(3).snapshot()).splitlines()
        assert lines[0] == " 0   |   |"
        assert lines[2] == " 2   |   |"
        assert lines[-1] == " A   B   C"
