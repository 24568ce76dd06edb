"""Tests for the application controller around the scheduler."""

import pytest

from hanoi3d.app import HanoiApp
from hanoi3d.config import HanoiConfig
from hanoi3d.errors import InvalidDiskCount
from hanoi3d.logger import RunLogger
from hanoi3d.scheduler import PlaybackState
from hanoi3d.solver import Rod


def play(app, start=0.0, interval=1000.0 / 60, limit=50_000):
    t = start
    for _ in range(limit):
        if app.finished:
            break
        app.frame(t)
        t += interval
    return t


class TestLoad:
    def test_load_rejects_out_of_range(self):
        app = HanoiApp()
        for bad in (2, 26, 0, -1):
            with pytest.raises(InvalidDiskCount) as exc:
                app.load(bad)
            assert (exc.value.lo, exc.value.hi) == (3, 25)

    def test_load_rejects_non_integers(self):
        app = HanoiApp()
        with pytest.raises(InvalidDiskCount):
            app.load("4")
        with pytest.raises(ValueError):
            app.load(True)

    def test_load_builds_fresh_puzzle(self):
        app = HanoiApp()
        app.load(5)
        assert app.disk_count == 5
        assert app.scheduler.remaining == 31
        assert app.scheduler.towers.snapshot()[Rod.A] == (4, 3, 2, 1, 0)
        assert app.toggle_label == "Start"

    def test_load_defaults_to_configured_count(self):
        app = HanoiApp(HanoiConfig(disks=4))
        app.load()
        assert app.scheduler.plan.disks == 4

    def test_load_stops_playback(self):
        app = HanoiApp()
        app.load(3)
        app.toggle()
        app.frame(0.0)
        app.load(4)
        assert app.scheduler.state is PlaybackState.IDLE
        assert app.toggle_label == "Start"
        assert app.scheduler.cursor == 0


class TestDiskCountField:
    def test_clamps_low_input_and_skips_reload(self):
        app = HanoiApp()
        app.load(3)
        plan = app.scheduler.plan
        assert app.set_disk_count(1) == 3
        assert app.scheduler.plan is plan

    def test_clamps_high_input_and_reloads(self):
        app = HanoiApp(HanoiConfig(max_disks=6))
        app.load(3)
        assert app.set_disk_count(40) == 6
        assert app.disk_count == 6
        assert app.scheduler.remaining == 63

    @pytest.mark.parametrize("raw", ["many", "", None, "4.5"])
    def test_non_numeric_input_rejected(self, raw):
        app = HanoiApp()
        app.load(3)
        plan = app.scheduler.plan
        with pytest.raises(InvalidDiskCount):
            app.set_disk_count(raw)
        assert app.scheduler.plan is plan
        assert app.disk_count == 3

    def test_change_reloads(self):
        app = HanoiApp()
        app.load(3)
        app.toggle()
        app.frame(0.0)
        assert app.set_disk_count("4") == 4
        assert app.scheduler.state is PlaybackState.IDLE
        assert app.scheduler.remaining == 15


class TestControls:
    def test_toggle_flips_label(self):
        app = HanoiApp()
        app.load(3)
        assert app.toggle() is PlaybackState.RUNNING
        assert app.toggle_label == "Stop"
        assert app.toggle() is PlaybackState.PAUSED
        assert app.toggle_label == "Start"

    def test_reload_discards_progress(self):
        app = HanoiApp()
        app.load(3)
        initial = app.scheduler.towers.snapshot()
        app.toggle()
        for t in range(0, 3000, 16):
            app.frame(float(t))
        assert app.scheduler.cursor == 3

        app.reload()
        assert app.scheduler.state is PlaybackState.IDLE
        assert app.scheduler.cursor == 0
        assert app.scheduler.towers.snapshot() == initial
        assert app.scheduler.settled

    def test_full_run_finishes_on_target(self):
        app = HanoiApp(HanoiConfig(strict=True))
        app.load(4)
        app.toggle()
        play(app)
        assert app.finished
        assert app.scheduler.towers.snapshot().is_solved_on(Rod.C)
        assert app.toggle_label == "Stop"


class TestRods:
    def test_custom_source_and_target(self):
        app = HanoiApp(HanoiConfig(strict=True), source=Rod.B, target=Rod.A)
        app.load(3)
        plan = app.scheduler.plan
        assert (plan.source, plan.target, plan.auxiliary) == (Rod.B, Rod.A, Rod.C)
        assert app.scheduler.towers.snapshot()[Rod.B] == (2, 1, 0)
        app.toggle()
        play(app)
        assert app.scheduler.towers.snapshot().is_solved_on(Rod.A)

    def test_same_rod_rejected(self):
        with pytest.raises(ValueError):
            HanoiApp(source=Rod.C, target=Rod.C)


def test_logger_receives_moves_and_state_changes():
    logger = RunLogger(every=0)
    app = HanoiApp(logger=logger)
    app.load(3)
    app.toggle()
    play(app)
    moves = [e["move"] for e in logger.events if e["type"] == "move"]
    assert [(m["source"], m["target"]) for m in moves] == [
        ("A", "C"), ("A", "B"), ("C", "B"), ("A", "C"),
        ("B", "A"), ("B", "C"), ("A", "C"),
    ]
    assert [m["rank"] for m in moves] == [0, 1, 0, 2, 0, 1, 0]
    states = [(e["from"], e["to"]) for e in logger.events if e["type"] == "state"]
    assert states == [("IDLE", "RUNNING")]
