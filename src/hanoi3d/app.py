"""Application controller wiring the solver, the scheduler and the UI state."""
from __future__ import annotations

from typing import Optional

from .config import HanoiConfig
from .errors import InvalidDiskCount
from .logger import RunLogger
from .scheduler import DiskFactory, PlaybackScheduler, PlaybackState, StepRecord, default_disk_factory
from .solver import Rod, solve, spare_rod


class HanoiApp:
    """
    The part of the program a user talks to: a disk-count field, a reload
    button and a start/stop toggle, plus the per-frame hook.

    ``toggle_label`` mirrors the scheduler state through a subscription, so
    the label changes only when the state really does.
    """

    def __init__(
        self,
        config: Optional[HanoiConfig] = None,
        logger: Optional[RunLogger] = None,
        disk_factory: DiskFactory = default_disk_factory,
        source: Rod = Rod.A,
        target: Rod = Rod.C,
    ):
        if source is target:
            raise ValueError(f"Source and target must differ, got {source.value} twice")
        self.config = config or HanoiConfig()
        self.logger = logger
        self.source = source
        self.target = target
        self.scheduler = PlaybackScheduler(self.config, disk_factory=disk_factory)
        self.disk_count = self.config.disks
        self.toggle_label = "Start"
        self.scheduler.subscribe(self._on_state_change)
        if logger is not None:
            self.scheduler.subscribe(logger.record_state)

    def _on_state_change(self, old: PlaybackState, new: PlaybackState) -> None:
        self.toggle_label = "Stop" if new is PlaybackState.RUNNING else "Start"

    def load(self, n: Optional[int] = None) -> None:
        """Solve for ``n`` disks and restart playback from the source rod."""
        n = self.disk_count if n is None else n
        if isinstance(n, bool) or not isinstance(n, int) or not self.config.min_disks <= n <= self.config.max_disks:
            raise InvalidDiskCount(n, self.config.min_disks, self.config.max_disks)
        self.scheduler.stop()
        self.disk_count = n
        self.scheduler.load(solve(n, self.source, self.target, spare_rod(self.source, self.target)))

    def reload(self) -> None:
        self.scheduler.stop()
        self.load(self.disk_count)

    def set_disk_count(self, raw) -> int:
        """Handle a value typed into the disk-count field; out-of-range input is clamped.

        Reloads only when the clamped count differs from the current one.
        Returns the value the field should now display.
        """
        try:
            n = self.config.clamp_disks(int(raw))
        except (TypeError, ValueError) as e:
            raise InvalidDiskCount(raw, self.config.min_disks, self.config.max_disks) from e
        if n != self.disk_count:
            self.load(n)
        return n

    def toggle(self) -> PlaybackState:
        if self.scheduler.running:
            return self.scheduler.stop()
        return self.scheduler.start()

    def frame(self, delta: float) -> Optional[StepRecord]:
        step = self.scheduler.tick(delta)
        if self.logger is not None:
            if step is not None:
                self.logger.record_step(self.scheduler, step, delta)
            if self.logger.wants_snapshot(self.scheduler.tick_count):
                self.logger.snapshot(self.scheduler, note=f"tick {self.scheduler.tick_count}", delta=delta)
        return step

    @property
    def finished(self) -> bool:
        """Plan drained and every disk has come to rest on its final keyframe."""
        return self.scheduler.drained and self.scheduler.settled
