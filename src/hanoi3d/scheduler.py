# src/hanoi3d/scheduler.py
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Sequence

from .config import HanoiConfig
from .disk import AnimatedDisk, DiskLike, build_arc
from .errors import EmptyRodError, StackingViolation
from .layout import DISK_TUBE, Layout
from .solver import Move, Plan
from .towers import TowerState


class PlaybackState(Enum):
    IDLE = auto()      # nothing loaded, or freshly (re)loaded
    RUNNING = auto()   # draining moves on the step timer
    PAUSED = auto()    # stopped part-way, timer suspended


class PlaybackEvent(Enum):
    LOAD = auto()
    START = auto()
    STOP = auto()


def transition(state: PlaybackState, event: PlaybackEvent, drained: bool = False) -> PlaybackState:
    """Next playback state for ``event``. Unlisted combinations leave the state alone."""
    if event is PlaybackEvent.LOAD:
        return PlaybackState.IDLE
    if event is PlaybackEvent.START:
        if state in (PlaybackState.IDLE, PlaybackState.PAUSED) and not drained:
            return PlaybackState.RUNNING
        return state
    if event is PlaybackEvent.STOP:
        if state is PlaybackState.RUNNING:
            return PlaybackState.PAUSED
        return state
    raise ValueError(f"Unknown playback event: {event!r}")


StateListener = Callable[[PlaybackState, PlaybackState], None]
DiskFactory = Callable[[int, int, Layout, Sequence[float], HanoiConfig], DiskLike]


def default_disk_factory(
    rank: int,
    row: int,
    layout: Layout,
    position: Sequence[float],
    config: HanoiConfig,
) -> AnimatedDisk:
    """Torus disk for stack ``row`` with the scene's size, palette and smoothing."""
    return AnimatedDisk(
        rank=rank,
        radius=layout.disk_radius(rank),
        tube=DISK_TUBE,
        color=layout.disk_color(row),
        position=position,
        eta=config.smoothing,
    )


@dataclass
class StepRecord:
    """What one dispatched move did; returned by ``tick`` for loggers."""
    index: int
    move: Move
    rank: int
    delta: float
    slot: tuple


class PlaybackScheduler:
    """
    Frame-driven executor for a Hanoi plan:
    - ``load`` stacks fresh disks on the plan's source rod and rewinds the cursor.
    - While RUNNING, a tick dispatches the next move once ``delta`` reaches the
      step timer, then re-arms the timer at ``delta + step_interval``.
    - Every tick, in any state, lets each disk advance its own keyframe arc.
    - State changes are pushed to subscribers instead of touching any UI here.

    A move is applied to the tower state in a single tick, never partially.
    """

    def __init__(
        self,
        config: Optional[HanoiConfig] = None,
        disk_factory: DiskFactory = default_disk_factory,
    ):
        self.config = config or HanoiConfig()
        self.disk_factory = disk_factory
        self.state = PlaybackState.IDLE
        self.plan: Optional[Plan] = None
        self.layout: Optional[Layout] = None
        self.towers = TowerState(strict=self.config.strict)
        self.cursor = 0
        self.timer: Optional[float] = None
        self.tick_count = 0
        self._listeners: List[StateListener] = []

    # --- notifications ---
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener(old, new)``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, event: PlaybackEvent) -> PlaybackState:
        old = self.state
        self.state = transition(old, event, drained=self.drained)
        if self.state is not old:
            for listener in list(self._listeners):
                listener(old, self.state)
        return self.state

    # --- queries ---
    @property
    def remaining(self) -> int:
        if self.plan is None:
            return 0
        return len(self.plan) - self.cursor

    @property
    def drained(self) -> bool:
        return self.remaining == 0

    @property
    def running(self) -> bool:
        return self.state is PlaybackState.RUNNING

    @property
    def settled(self) -> bool:
        """True when no disk has keyframes left to play."""
        return not any(getattr(d, "pending", False) for d in self.towers.disks())

    # --- transitions ---
    def load(self, plan: Plan) -> None:
        """Discard everything and stack ``plan.disks`` fresh disks on the source rod."""
        layout = Layout.for_disks(plan.disks, self.config.lift_clearance) if plan.disks else None
        disks = []
        for row in range(plan.disks):
            rank = plan.disks - 1 - row
            position = layout.slot_position(row, plan.source.column)
            disks.append(self.disk_factory(rank, row, layout, position, self.config))

        self.plan = plan
        self.layout = layout
        self.towers = TowerState.initial(disks, plan.source, strict=self.config.strict)
        self.cursor = 0
        self.timer = None
        self._dispatch(PlaybackEvent.LOAD)

    def start(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.START)

    def stop(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.STOP)

    def abort(self) -> None:
        """Drop the plan after an invariant violation; the towers are left for inspection."""
        self.plan = None
        self.cursor = 0
        self.timer = None
        self._dispatch(PlaybackEvent.LOAD)

    # --- per-frame ---
    def tick(self, delta: float) -> Optional[StepRecord]:
        """Advance one frame at timestamp ``delta``; returns the dispatched step, if any."""
        self.tick_count += 1
        record = None
        if self.running and not self.drained and (self.timer is None or delta >= self.timer):
            record = self._advance(delta)
            # Re-armed from this frame's delta, so the cadence drifts by frame granularity.
            self.timer = delta + self.config.step_interval

        for disk in self.towers.disks():
            disk.update(delta)
        return record

    def _advance(self, delta: float) -> StepRecord:
        if self.plan is None or self.layout is None:
            raise RuntimeError("No plan loaded to advance")
        move = self.plan[self.cursor]
        slot = self.layout.slot_position(self.towers.height(move.target), move.target.column)
        try:
            disk = self.towers.pop_top(move.source)
        except EmptyRodError:
            self.abort()
            raise
        try:
            self.towers.push_top(move.target, disk)
        except StackingViolation:
            # back where it came from, so every rank is still on some rod
            self.towers.push_top(move.source, disk)
            self.abort()
            raise

        disk.set_target(
            build_arc(disk.get_position(), slot, self.layout.lift_height, self.config.arc_durations)
        )
        record = StepRecord(self.cursor, move, disk.rank, delta, slot)
        self.cursor += 1
        return record

    def snapshot(self, note: str = "") -> Dict[str, Any]:
        """Plain-dict view of the playback for run logs."""
        return {
            "tick": self.tick_count,
            "note": note,
            "state": self.state.name,
            "cursor": self.cursor,
            "remaining": self.remaining,
            "towers": self.towers.snapshot().as_dict(),
        }
