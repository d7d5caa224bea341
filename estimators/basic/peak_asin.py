from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from estimators.base import EstimatorBase
from utils.pmu.measurement import InstantaneousMeasurement, values_of
from utils.pmu.phasor import ZERO_PHASOR, Phasor, PhasorStatus

logger = logging.getLogger(__name__)

MIN_SAMPLES = 2


def rms(values: np.ndarray) -> float:
    """Root-mean-square of a 1-D array, 0.0 when empty."""
    x = np.asarray(values, dtype=float).ravel()
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(x * x)))


def phase_angle_degrees(x0: float, x1: float, rms_value: float) -> float:
    """
    Phase of a pure sinusoid from its first two samples.

    The first sample fixes sin(theta) = x0 / peak; the second tells whether the
    wave is rising or falling, which picks between theta and 180 - theta.
    """
    peak = rms_value * math.sqrt(2.0)

    # clipped: first sample at or beyond the peak
    if x0 >= peak:
        return 90.0
    if x0 <= -peak:
        return -90.0

    theta = math.degrees(math.asin(x0 / peak))

    if x1 >= x0:
        return theta
    # falling: Q2 for a positive start, Q3 for a negative one
    if x0 >= 0.0:
        return 180.0 - theta
    return -180.0 - theta


class PeakAsinEstimator(EstimatorBase):
    """
    RMS + arcsine phasor estimator.

    Magnitude is the RMS over the whole record; the phase angle uses only the
    first two samples. Assumes a single-frequency sinusoid sampled finely
    enough that sample[1] reliably shows the local slope.
    """

    def __init__(self, config: Any = None, name: str = "peak_asin") -> None:
        super().__init__(config=config, name=name)

    def estimate(self, samples: Sequence[InstantaneousMeasurement]) -> tuple[Phasor, PhasorStatus]:
        if len(samples) < MIN_SAMPLES:
            logger.warning(
                "Insufficient number of samples to calculate a phasor (%d < %d)",
                len(samples),
                MIN_SAMPLES,
            )
            self.status_word = PhasorStatus.INSUFFICIENT_SAMPLES
            return ZERO_PHASOR, self.status_word

        x = values_of(samples)
        rms_value = rms(x)
        if rms_value == 0.0:
            # flat zero record
            self.status_word = PhasorStatus.OK
            return ZERO_PHASOR, self.status_word

        angle = phase_angle_degrees(float(x[0]), float(x[1]), rms_value)
        self.status_word = PhasorStatus.OK
        return Phasor(rms_value, angle), self.status_word
