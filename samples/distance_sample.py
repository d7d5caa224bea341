# samples/distance_sample.py
# ---------------------------------------------------------------------
# Weighted Euclidean distance between a line sample with a known status
# and the line sample whose status is being predicted.
#
# Provides:
#   - DistanceWeights: per-feature weights (line, node, other)
#   - are_samples_of_the_same_line(): structural comparability check
#   - weighted_distance(): the metric itself
#   - DistanceSample: one known-vs-unknown comparison, ordered by distance
# ---------------------------------------------------------------------
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from samples.line_sample import LineSample
from utils.pmu.parameter import Parameter

__all__ = [
    "DEFAULT_WEIGHTS",
    "DistanceSample",
    "DistanceWeights",
    "IncomparableSamplesError",
    "are_samples_of_the_same_line",
    "weighted_distance",
]

logger = logging.getLogger(__name__)


class IncomparableSamplesError(ValueError):
    """The two line samples do not describe the same line topology."""


@dataclass(frozen=True, slots=True)
class DistanceWeights:
    """Weights of the line-current, node-voltage and other-current terms."""

    line: float = 20.0
    node: float = 4.0
    other: float = 1.0


DEFAULT_WEIGHTS = DistanceWeights()


# ------------------------- Comparability -------------------------


def _same_pairs(a: Sequence[Parameter], b: Sequence[Parameter]) -> bool:
    if len(a) != len(b):
        return False
    return all(pa.node_pair == pb.node_pair for pa, pb in zip(a, b))


def are_samples_of_the_same_line(known: LineSample | None, unknown: LineSample | None) -> bool:
    """
    True when both samples describe the same line: identical node pairs on
    the line currents, identical start nodes on the voltages, and the same
    other currents in the same order at each node.
    """
    if known is None or unknown is None:
        if known is None:
            logger.error("are_samples_of_the_same_line(): known line sample is missing")
        if unknown is None:
            logger.error("are_samples_of_the_same_line(): unknown line sample is missing")
        return False

    if known.node1_line_current_norm.node_pair != unknown.node1_line_current_norm.node_pair:
        return False
    if known.node2_line_current_norm.node_pair != unknown.node2_line_current_norm.node_pair:
        return False
    if known.node1_voltage_norm.start_node != unknown.node1_voltage_norm.start_node:
        return False
    if known.node2_voltage_norm.start_node != unknown.node2_voltage_norm.start_node:
        return False

    return _same_pairs(
        known.node1_other_currents_norm, unknown.node1_other_currents_norm
    ) and _same_pairs(known.node2_other_currents_norm, unknown.node2_other_currents_norm)


# ---------------------------- Metric ------------------------------


def _sq_diff(a: Parameter, b: Parameter) -> float:
    return (a.phasor - b.phasor).rms_value ** 2


def _other_term(known: Sequence[Parameter], unknown: Sequence[Parameter], w_other: float) -> float:
    n = len(known)
    # no other currents: nothing to add, and no division by zero
    return sum(w_other / (2.0 * n) * _sq_diff(k, u) for k, u in zip(known, unknown))


def weighted_distance(
    known: LineSample, unknown: LineSample, weights: DistanceWeights = DEFAULT_WEIGHTS
) -> float:
    """Weighted Euclidean distance; the samples must already be comparable."""
    dist = 0.0

    # line currents
    dist += weights.line / 2.0 * _sq_diff(known.node1_line_current_norm, unknown.node1_line_current_norm)
    dist += weights.line / 2.0 * _sq_diff(known.node2_line_current_norm, unknown.node2_line_current_norm)

    # node voltages
    dist += weights.node / 2.0 * _sq_diff(known.node1_voltage_norm, unknown.node1_voltage_norm)
    dist += weights.node / 2.0 * _sq_diff(known.node2_voltage_norm, unknown.node2_voltage_norm)

    # other currents
    dist += _other_term(known.node1_other_currents_norm, unknown.node1_other_currents_norm, weights.other)
    dist += _other_term(known.node2_other_currents_norm, unknown.node2_other_currents_norm, weights.other)

    return math.sqrt(dist)


# ------------------------- Distance sample -------------------------


@dataclass(frozen=True, slots=True, order=True)
class DistanceSample:
    """
    Distance between one known-status line sample and the unknown one.

    Instances order by distance only. Raises IncomparableSamplesError when
    the two samples are not of the same line.
    """

    distance: float = field(init=False)
    line: LineSample = field(compare=False)
    unknown: LineSample = field(compare=False, repr=False)
    weights: DistanceWeights = field(default=DEFAULT_WEIGHTS, compare=False)
    is_working: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if not are_samples_of_the_same_line(self.line, self.unknown):
            msg = "known and unknown line samples are not samples of the same line"
            logger.error("DistanceSample(): %s", msg)
            raise IncomparableSamplesError(msg)

        object.__setattr__(self, "is_working", bool(self.line.is_working))
        object.__setattr__(self, "distance", weighted_distance(self.line, self.unknown, self.weights))

    def describe(self) -> str:
        return "\n".join(
            [
                self.line.describe(),
                f"Wline = {self.weights.line:.6f}",
                f"Wnode = {self.weights.node:.6f}",
                f"Wother = {self.weights.other:.6f}",
                f"distance = {self.distance:.6f}",
                f"isWorking = {self.is_working}",
            ]
        )
