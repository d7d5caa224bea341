# scenarios/s1_synthetic/make_clean.py
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from utils.pmu.measurement import InstantaneousMeasurement, measurements_from_arrays
from utils.pmu.phasor import Phasor


def make_clean(
    rms: float = 120.0,
    phase_deg: float = 30.0,
    f0: float = 60.0,
    duration: float = 1.0,
    fs: int = 32000,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Generate a clean sinusoid A*sin(2*pi*f0*t + theta) with A = sqrt(2)*rms.

    Parameters
    ----------
    rms : float
        RMS value of the waveform [base units].
    phase_deg : float
        Phase angle theta at t = 0 [deg].
    f0 : float
        Frequency [Hz].
    duration : float
        Signal length [s]. Must be >= 0.
    fs : int
        Sampling rate [Hz]. Must be > 0.

    Returns
    -------
    t : NDArray[np.float64]
        Time base [s], half-open interval [0, duration).
    signal : NDArray[np.float64]
        Sinusoidal signal.
    """
    if fs <= 0:
        raise ValueError("fs must be > 0")
    if duration < 0:
        raise ValueError("duration must be >= 0")

    n = int(round(float(fs) * float(duration)))
    t: NDArray[np.float64] = np.arange(n, dtype=float) / float(fs)
    amplitude = np.sqrt(2.0) * float(rms)
    theta = np.deg2rad(float(phase_deg))
    signal: NDArray[np.float64] = (amplitude * np.sin(2.0 * np.pi * f0 * t + theta)).astype(
        np.float64, copy=False
    )
    return t, signal


def sample_phasor(
    phasor: Phasor,
    f0: float = 60.0,
    duration: float = 1.0,
    fs: int = 32000,
) -> tuple[InstantaneousMeasurement, ...]:
    """Instantaneous measurements of the sinusoid described by `phasor`."""
    t, signal = make_clean(phasor.rms_value, phasor.phase_angle_degrees, f0, duration, fs)
    return measurements_from_arrays(t, signal)
