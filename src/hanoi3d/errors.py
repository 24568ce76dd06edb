# src/hanoi3d/errors.py
"""Exception hierarchy for the Hanoi playback core."""


class HanoiError(Exception):
    """Base class for every error raised by hanoi3d."""


class InvalidDiskCount(HanoiError, ValueError):
    """Disk count outside the range the application is configured for."""

    def __init__(self, n, lo: int, hi: int):
        super().__init__(f"Disk count {n!r} outside supported range [{lo}, {hi}]")
        self.n = n
        self.lo = lo
        self.hi = hi


class EmptyRodError(HanoiError, IndexError):
    """Pop from a rod with no disks. Always an invariant violation."""

    def __init__(self, rod):
        super().__init__(f"Rod {getattr(rod, 'name', rod)} has no disk to pop")
        self.rod = rod


class StackingViolation(HanoiError):
    """A larger disk ended up above a smaller one, or a rank is missing/duplicated."""


class ConfigError(HanoiError, ValueError):
    """Malformed configuration payload."""
