"""Per-frame smoothing helpers."""

from .smoothing import SMOOTHING_FACTOR, settle, settle_toward

__all__ = ["SMOOTHING_FACTOR", "settle", "settle_toward"]
