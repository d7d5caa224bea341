from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from samples.distance_sample import DistanceSample, DistanceWeights
from samples.line_sample import LineSample

__all__ = ["DEFAULT_K", "KnnPredictor", "majority_vote"]

logger = logging.getLogger(__name__)

DEFAULT_K = 5


def majority_vote(statuses: Iterable[bool]) -> bool:
    """
    True (working) only when working votes strictly outnumber not-working
    ones. A tie predicts not working.
    """
    working = 0
    not_working = 0
    for status in statuses:
        if status:
            working += 1
        else:
            not_working += 1
    return working > not_working


def _sift_down_last(nearest: list[DistanceSample], last: int) -> None:
    """Move nearest[last] left until the list is ascending again."""
    for i in range(last, 0, -1):
        if nearest[i].distance < nearest[i - 1].distance:
            nearest[i], nearest[i - 1] = nearest[i - 1], nearest[i]
        else:
            break


class KnnPredictor:
    """
    Weighted KNN prediction of the status of a line with unknown status.

    Config keys (with defaults):
      - k: int                    (default 5) number of nearest neighbors
      - w_line: float             (default 20.0) line-current weight
      - w_node: float             (default 4.0) node-voltage weight
      - w_other: float            (default 1.0) other-current weight

    Distances and the prediction are computed on construction.
    """

    def __init__(
        self,
        samples_with_known_statuses: Sequence[LineSample],
        sample_with_unknown_status: LineSample,
        config: Mapping[str, Any] | Any = None,
        name: str = "knn",
    ) -> None:
        config = {} if config is None else config

        def g(key: str, default: Any) -> Any:
            return (
                getattr(config, key, default) if hasattr(config, key) else config.get(key, default)
            )

        self.name: str = name
        self.weights: DistanceWeights = DistanceWeights(
            line=float(g("w_line", 20.0)),
            node=float(g("w_node", 4.0)),
            other=float(g("w_other", 1.0)),
        )
        self.samples_with_known_statuses: tuple[LineSample, ...] = tuple(samples_with_known_statuses)
        self.sample_with_unknown_status: LineSample = sample_with_unknown_status

        self.number_of_nearest_neighbors: int = 0
        self.nearest: list[DistanceSample] = []
        self.predicted_status: bool = False

        self.set_distances(int(g("k", DEFAULT_K)))

    @property
    def number_of_known_statuses(self) -> int:
        return len(self.samples_with_known_statuses)

    def _check_k(self, k: int) -> None:
        if k < 1:
            msg = f"The number of nearest neighbors must be >= 1, got {k}"
            logger.error(msg)
            raise ValueError(msg)
        if k > self.number_of_known_statuses:
            msg = (
                f"The number of nearest neighbors ({k}) is larger than the number "
                f"of known statuses ({self.number_of_known_statuses})"
            )
            logger.error(msg)
            raise ValueError(msg)

    def set_distances(self, k: int | None = None) -> None:
        """
        Rebuild the ascending list of the k nearest known samples and the
        prediction. On a bad k nothing is modified.
        """
        k = self.number_of_nearest_neighbors if k is None else int(k)
        self._check_k(k)

        unknown = self.sample_with_unknown_status
        nearest: list[DistanceSample] = []

        for index, known in enumerate(self.samples_with_known_statuses):
            candidate = DistanceSample(known, unknown, self.weights)

            # fill phase: first k samples
            if index < k:
                nearest.append(candidate)
                _sift_down_last(nearest, index)
            # replace the current worst only when strictly closer
            elif candidate.distance < nearest[k - 1].distance:
                nearest[k - 1] = candidate
                _sift_down_last(nearest, k - 1)

        self.nearest = nearest
        self.number_of_nearest_neighbors = k
        self.predicted_status = self.predict_status()
        logger.debug("%s: k=%d, prediction=%s", self.name, k, self.predicted_status)

    def predict_status(self) -> bool:
        return majority_vote(d.is_working for d in self.nearest)

    def change_number_of_nearest_neighbors(self, number_of_nearest_neighbors: int) -> None:
        if number_of_nearest_neighbors == self.number_of_nearest_neighbors:
            return
        self.set_distances(number_of_nearest_neighbors)

    @property
    def distances(self) -> list[float]:
        return [d.distance for d in self.nearest]

    def describe(self) -> str:
        lines = ["KNN Algorithm:"]
        lines += [f"distances[{i}] distance: {d.distance:.6f}" for i, d in enumerate(self.nearest)]
        lines.append(f"Line Status Prediction: {self.predicted_status}")
        return "\n".join(lines)

    def to_standard_dict(self) -> dict[str, Any]:
        return {
            "NAME": self.name,
            "K": self.number_of_nearest_neighbors,
            "N_KNOWN": self.number_of_known_statuses,
            "WEIGHTS": {"LINE": self.weights.line, "NODE": self.weights.node, "OTHER": self.weights.other},
            "DISTANCES": self.distances,
            "STATUSES": [d.is_working for d in self.nearest],
            "PREDICTED_STATUS": bool(self.predicted_status),
        }
