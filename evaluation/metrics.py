from __future__ import annotations

import numpy as np

from utils.pmu.phasor import Phasor


def phasor_percent_error(estimate: Phasor, reference: Phasor) -> float:
    """
    Percent error of an estimated phasor, 100 * |reference - estimate| / |reference|,
    measured in the complex plane so magnitude and phase errors both count.
    """
    if reference.rms_value == 0.0:
        raise ValueError("reference phasor must have a non-zero magnitude")
    return float(100.0 * (reference - estimate).rms_value / reference.rms_value)


def classification_accuracy(predicted: np.ndarray, truth: np.ndarray) -> float:
    """
    Fraction of matching line statuses, elementwise.
    Both arrays must be 1-D and same length.
    """
    pred = np.asarray(predicted, dtype=bool).ravel()
    tru = np.asarray(truth, dtype=bool).ravel()
    if pred.size != tru.size:
        raise ValueError("predicted and truth must have the same length")
    if pred.size == 0:
        raise ValueError("predicted and truth must not be empty")
    return float(np.mean(pred == tru))
