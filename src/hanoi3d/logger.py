import json
from typing import List, Dict, Any, Optional


class RunLogger:
    """
    Collects per-frame records for replay and inspection.

    Frame schema (all optional except type/tick):
      {
        "type": "snapshot" | "move" | "state",
        "tick": int,
        "delta": float,
        "note": str,
        "state": "IDLE" | "RUNNING" | "PAUSED",
        "cursor": int,
        "remaining": int,
        "move": {"index": int, "source": "A", "target": "C", "rank": int},
        "towers": {"A": [ranks...], "B": [...], "C": [...]},
        "from": str, "to": str            # state frames only
      }
    """

    def __init__(self, every: int = 0):
        self.events: List[Dict[str, Any]] = []
        self.every = every
        self._last_tick: Optional[int] = None

    def snapshot(self, scheduler, note: str = "", delta: Optional[float] = None) -> Dict[str, Any]:
        frame: Dict[str, Any] = {"type": "snapshot"}
        frame.update(scheduler.snapshot(note=note))
        if delta is not None:
            frame["delta"] = delta
        self._last_tick = frame["tick"]
        self.events.append(frame)
        return frame

    def record_step(self, scheduler, step, delta: float) -> Dict[str, Any]:
        """Log a dispatched move together with the towers right after it."""
        frame: Dict[str, Any] = {
            "type": "move",
            "tick": scheduler.tick_count,
            "delta": delta,
            "move": {
                "index": step.index,
                "source": step.move.source.value,
                "target": step.move.target.value,
                "rank": step.rank,
            },
            "towers": scheduler.towers.snapshot().as_dict(),
        }
        self._last_tick = frame["tick"]
        self.events.append(frame)
        return frame

    def record_state(self, old, new) -> Dict[str, Any]:
        """State-change listener; subscribe it to a PlaybackScheduler."""
        frame: Dict[str, Any] = {"type": "state", "from": old.name, "to": new.name}
        if self._last_tick is not None:
            frame["tick"] = self._last_tick
        self.events.append(frame)
        return frame

    def wants_snapshot(self, tick: int) -> bool:
        return self.every > 0 and tick % self.every == 0

    def to_json(self, path: str):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.events, f, indent=2)
