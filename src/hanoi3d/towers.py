"""Tower state: which disks sit on which rod, in stack order."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple

from .errors import EmptyRodError, StackingViolation
from .solver import ROD_ORDER, Rod


@dataclass(frozen=True)
class TowerSnapshot:
    """Read-only view of the towers as disk ranks, bottom of each rod first."""

    rods: Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]

    def __getitem__(self, rod: Rod) -> Tuple[int, ...]:
        return self.rods[rod.column]

    @property
    def disks(self) -> int:
        return sum(len(stack) for stack in self.rods)

    def is_solved_on(self, rod: Rod) -> bool:
        """True iff every disk is stacked on ``rod``."""
        return len(self[rod]) == self.disks

    def as_dict(self) -> Dict[str, List[int]]:
        return {rod.value: list(self[rod]) for rod in ROD_ORDER}

    def __str__(self) -> str:
        """Render the rods as ASCII rows (top row first)."""
        height = max((len(stack) for stack in self.rods), default=0)
        levels = []
        for level in range(height - 1, -1, -1):
            row = []
            for stack in self.rods:
                if len(stack) > level:
                    row.append(str(stack[level]).rjust(2))
                else:
                    row.append(" |")
            levels.append("  ".join(row))
        labels = "  ".join(rod.value.rjust(2) for rod in ROD_ORDER)
        return "\n".join(levels + [labels])


class TowerState:
    """Three stacks of disks; push and pop only at the top.

    Disks are any objects exposing an integer ``rank`` (0 = smallest).
    ``push_top`` trusts its caller. With ``strict=True`` every push is
    checked against the stacking rule, which is what the test-suite uses.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._stacks: Dict[Rod, List] = {rod: [] for rod in ROD_ORDER}

    @classmethod
    def initial(cls, disks: Iterable, rod: Rod = Rod.A, strict: bool = False) -> "TowerState":
        """Stack ``disks`` on ``rod`` in the order given (largest first)."""
        state = cls(strict=strict)
        for disk in disks:
            state.push_top(rod, disk)
        return state

    def pop_top(self, rod: Rod):
        stack = self._stacks[rod]
        if not stack:
            raise EmptyRodError(rod)
        return stack.pop()

    def push_top(self, rod: Rod, disk) -> None:
        stack = self._stacks[rod]
        if self.strict and stack and stack[-1].rank <= disk.rank:
            raise StackingViolation(
                f"Disk {disk.rank} cannot go on top of disk {stack[-1].rank} on rod {rod.value}"
            )
        stack.append(disk)

    def top(self, rod: Rod):
        stack = self._stacks[rod]
        return stack[-1] if stack else None

    def height(self, rod: Rod) -> int:
        return len(self._stacks[rod])

    def stack(self, rod: Rod) -> Tuple:
        return tuple(self._stacks[rod])

    def disks(self) -> Iterator:
        """All disks, rod A bottom-up first, then B, then C."""
        for rod in ROD_ORDER:
            yield from self._stacks[rod]

    def __len__(self) -> int:
        return sum(len(stack) for stack in self._stacks.values())

    def snapshot(self) -> TowerSnapshot:
        return TowerSnapshot(
            tuple(tuple(d.rank for d in self._stacks[rod]) for rod in ROD_ORDER)  # type: ignore[arg-type]
        )

    def check_invariants(self) -> None:
        """Raise StackingViolation unless ranks strictly decrease upward and 0..N-1 each appear once."""
        ranks: List[int] = []
        for rod in ROD_ORDER:
            stack = [d.rank for d in self._stacks[rod]]
            for lower, upper in zip(stack, stack[1:]):
                if upper >= lower:
                    raise StackingViolation(
                        f"Rod {rod.value} holds disk {upper} above disk {lower}"
                    )
            ranks.extend(stack)
        if sorted(ranks) != list(range(len(ranks))):
            raise StackingViolation(f"Disk ranks are not a permutation of 0..{len(ranks) - 1}: {sorted(ranks)}")
