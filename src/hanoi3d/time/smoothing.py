"""
Exponential smoothing used to settle disk positions between frames. Each call
nudges a value a fixed fraction of the way toward its target, so the target is
approached geometrically and never reached in a finite number of steps.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

SMOOTHING_FACTOR = 0.3

Vector = Union[Sequence[float], np.ndarray]


def settle(y: float, target: float, eta: float = SMOOTHING_FACTOR) -> float:
    """Single smoothing step toward target: y + eta * (target - y)."""
    return y + eta * (target - y)


def settle_toward(position: Vector, target: Vector, eta: float = SMOOTHING_FACTOR) -> np.ndarray:
    """
    Apply `settle` independently on every axis. Returns a new float array; the
    input is left untouched.
    """
    p = np.asarray(position, dtype=float)
    t = np.asarray(target, dtype=float)
    return settle(p, t, eta)
