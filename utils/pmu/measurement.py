# utils/pmu/measurement.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


# ---- Data carriers ----------------------------------------------------------
@dataclass(frozen=True, slots=True)
class InstantaneousMeasurement:
    timestamp: float  # seconds
    value: float  # signal amplitude in base units

    def validate(self) -> None:
        if not np.isfinite([self.timestamp, self.value]).all():
            raise ValueError("Non-finite value in instantaneous measurement.")


def measurements_from_arrays(
    t: ArrayLike, x: ArrayLike
) -> tuple[InstantaneousMeasurement, ...]:
    """Pair a time base with signal values, one measurement per sample."""
    t_arr = np.asarray(t, dtype=float).ravel()
    x_arr = np.asarray(x, dtype=float).ravel()
    if t_arr.size != x_arr.size:
        raise ValueError("t and x must have the same length")
    return tuple(
        InstantaneousMeasurement(timestamp=float(ti), value=float(xi))
        for ti, xi in zip(t_arr.tolist(), x_arr.tolist())
    )


def values_of(samples: Sequence[InstantaneousMeasurement]) -> NDArray[np.float64]:
    return np.fromiter((s.value for s in samples), dtype=float, count=len(samples))
