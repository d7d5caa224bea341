from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from estimators.base import EstimatorBase
from utils.pmu.measurement import InstantaneousMeasurement, values_of
from utils.pmu.phasor import ZERO_PHASOR, Phasor, PhasorStatus, normalize_angle

logger = logging.getLogger(__name__)


class DFTPhasorEstimator(EstimatorBase):
    """
    Single-bin DFT phasor estimator at the nominal frequency.

    Uses every sample of the record, so it is far less sensitive to noise on
    the first samples than the peak/arcsine estimator. The phase is referenced
    to a sine wave starting at the first sample.

    Config keys (with defaults):
      - fs: float                 (required) sampling rate [Hz]
      - nominal_hz: float         (default 60.0) frequency of the DFT bin
    """

    def __init__(
        self,
        config: Mapping[str, Any] | Any,
        name: str = "dft",
    ) -> None:
        super().__init__(config=config, name=name)

        self.fs: float = float(self._cfg("fs", 0.0))
        if self.fs <= 0.0:
            raise ValueError("DFTPhasorEstimator requires config['fs'] > 0")

        self.nominal_hz: float = float(self._cfg("nominal_hz", 60.0))
        if self.nominal_hz <= 0.0:
            raise ValueError("DFTPhasorEstimator requires config['nominal_hz'] > 0")

    def _correlate(self, x: NDArray[np.float64]) -> complex:
        """Complex amplitude of the nominal-frequency component of x."""
        n = x.size
        t: NDArray[np.float64] = np.arange(n, dtype=float) / self.fs
        kernel: NDArray[np.complex128] = np.exp(-2j * np.pi * self.nominal_hz * t)
        return complex(2.0 * np.dot(x, kernel) / n)

    def estimate(self, samples: Sequence[InstantaneousMeasurement]) -> tuple[Phasor, PhasorStatus]:
        if len(samples) < 2:
            logger.warning("Insufficient number of samples to calculate a phasor (%d)", len(samples))
            self.status_word = PhasorStatus.INSUFFICIENT_SAMPLES
            return ZERO_PHASOR, self.status_word

        X = self._correlate(values_of(samples))
        amplitude = abs(X)
        self.status_word = PhasorStatus.OK
        if amplitude == 0.0:
            return ZERO_PHASOR, self.status_word

        # A*sin(wt + theta) = A*cos(wt + theta - 90deg)
        angle = normalize_angle(math.degrees(math.atan2(X.imag, X.real)) + 90.0)
        return Phasor(amplitude / math.sqrt(2.0), angle), self.status_word
