"""CLI runner for the headless Tower of Hanoi playback."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator, List, Optional

from .app import HanoiApp
from .config import HanoiConfig, load_config, save_config
from .errors import HanoiError
from .logger import RunLogger
from .solver import Rod, move_count


def frame_clock(interval: float, start: float = 0.0) -> Iterator[float]:
    """Monotonic frame timestamps ``start, start + interval, ...``."""
    frame = 0
    while True:
        yield start + frame * interval
        frame += 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play back the optimal Tower of Hanoi solution.")
    parser.add_argument("--n", type=int, default=None, help="Number of disks (default: from config, 3)")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--fps", type=float, default=None, help="Frames per second of the simulated clock")
    parser.add_argument(
        "--max-frames",
        type=int,
        default=0,
        help="Stop after this many frames even if the puzzle is not finished (0 = no limit)",
    )
    parser.add_argument("--log-json", type=Path, default=None, help="Write the run log to this JSON file")
    parser.add_argument(
        "--log-every",
        type=int,
        default=0,
        help="Optional frame interval for logging scheduler snapshots (0 disables)",
    )
    parser.add_argument("--frames-dir", type=Path, default=None, help="Render PNG frames into this directory")
    parser.add_argument("--render-every", type=int, default=10, help="Render one frame out of this many")
    parser.add_argument("--source", default="A", help="Rod the disks start on: A, B or C (default: A)")
    parser.add_argument("--target", default="C", help="Rod the disks must end on: A, B or C (default: C)")
    parser.add_argument("--save-config", type=Path, default=None, help="Write the effective config to this YAML file")
    parser.add_argument("--strict", action="store_true", help="Check the stacking rule on every move")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else HanoiConfig()
        if args.fps is not None:
            config.fps = args.fps
        if args.strict:
            config.strict = True
        config.validate()
    except HanoiError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    if args.save_config is not None:
        save_config(config, args.save_config)

    logger = RunLogger(every=args.log_every)
    try:
        app = HanoiApp(config, logger=logger, source=Rod.parse(args.source), target=Rod.parse(args.target))
        app.load(args.n if args.n is not None else config.disks)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    recorder = None
    if args.frames_dir is not None:
        from .viz.scene_viz import SceneRecorder

        recorder = SceneRecorder(args.frames_dir, every=args.render_every)

    scheduler = app.scheduler
    expected = move_count(app.disk_count)

    if not args.quiet:
        print("Initial state:")
        print(scheduler.towers.snapshot())
        print()

    app.toggle()
    frames = 0
    try:
        for delta in frame_clock(config.frame_interval):
            if app.finished or (args.max_frames and frames >= args.max_frames):
                break
            step = app.frame(delta)
            frames += 1
            if recorder is not None:
                recorder.capture(scheduler, title=f"move {scheduler.cursor}/{expected}")
            if step is not None and not args.quiet:
                print(f"Move {step.index + 1:03d}: disk {step.rank} {step.move}  (t={delta:.0f})")
    except HanoiError as e:
        print(f"Playback aborted: {e}", file=sys.stderr)
        return 1
    finally:
        if args.log_json is not None:
            logger.to_json(str(args.log_json))

    final = scheduler.towers.snapshot()
    if not args.quiet:
        print()
        print("Final state:")
        print(final)
        print()

    print(f"Goal reached: {final.is_solved_on(scheduler.plan.target)}")
    print(f"Moves executed: {scheduler.cursor}")
    print(f"Expected moves: {expected}")
    print(f"Frames: {frames}")
    if recorder is not None:
        print(f"Rendered frames: {len(recorder.paths)} in {args.frames_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
