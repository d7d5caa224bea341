# utils/pmu/parameter.py
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from estimators.base import EstimatorBase
from estimators.basic.peak_asin import PeakAsinEstimator
from utils.pmu.measurement import InstantaneousMeasurement
from utils.pmu.phasor import Phasor, PhasorStatus

__all__ = ["GROUND", "Parameter"]

logger = logging.getLogger(__name__)

GROUND = 0  # node number of ground / "no destination"


@dataclass(frozen=True, slots=True)
class Parameter:
    """
    A measured or derived electrical quantity between two nodes, such as a
    node voltage (destination = ground) or a branch current.
    """

    phasor: Phasor
    name: str = ""
    units: str = ""
    start_node: int = GROUND
    destination_node: int = GROUND
    samples: tuple[InstantaneousMeasurement, ...] = ()
    status_word: PhasorStatus = PhasorStatus.OK

    @classmethod
    def from_phasor(
        cls,
        phasor: Phasor,
        name: str = "",
        units: str = "",
        start_node: int = GROUND,
        destination_node: int = GROUND,
    ) -> Parameter:
        return cls(
            phasor=phasor,
            name=name,
            units=units,
            start_node=start_node,
            destination_node=destination_node,
        )

    @classmethod
    def from_samples(
        cls,
        samples: Sequence[InstantaneousMeasurement],
        name: str = "",
        units: str = "",
        start_node: int = GROUND,
        destination_node: int = GROUND,
        estimator: EstimatorBase | None = None,
    ) -> Parameter:
        """
        Estimate the phasor of a recorded waveform and keep the samples.

        With fewer than two samples the phasor is the zero phasor and
        status_word carries INSUFFICIENT_SAMPLES.
        """
        if estimator is None:
            estimator = PeakAsinEstimator()

        kept = tuple(samples)
        phasor, status = estimator.estimate(kept)
        if status is not PhasorStatus.OK:
            logger.warning("Parameter %r: phasor estimation failed (%s)", name, status.name)

        return cls(
            phasor=phasor,
            name=name,
            units=units,
            start_node=start_node,
            destination_node=destination_node,
            samples=kept,
            status_word=status,
        )

    @property
    def number_of_samples(self) -> int:
        return len(self.samples)

    @property
    def node_pair(self) -> tuple[int, int]:
        return self.start_node, self.destination_node

    def normalized(self, rating: float) -> Parameter:
        """Per-unit copy: the phasor divided by (rating, 0deg), samples dropped."""
        phasor, status = self.phasor.divide(Phasor(rating, 0.0))
        if status is not PhasorStatus.OK:
            logger.warning("Parameter %r: cannot normalize by rating %s", self.name, rating)
        return replace(self, phasor=phasor, samples=(), status_word=self.status_word | status)

    def describe(self) -> str:
        return "\n".join(
            [
                f"Name: {self.name}",
                f"Number of samples: {self.number_of_samples}",
                f"Phasor: {self.phasor}{self.units}",
                f"Starting Node: {self.start_node}",
                f"Destination Node: {self.destination_node}",
            ]
        )

    def to_standard_dict(self) -> dict[str, float | int | str]:
        return {
            "NAME": self.name,
            "UNITS": self.units,
            "START_NODE": int(self.start_node),
            "DESTINATION_NODE": int(self.destination_node),
            "N_SAMPLES": self.number_of_samples,
            "RMS": float(self.phasor.rms_value),
            "ANGLE_DEG": float(self.phasor.phase_angle_degrees),
            "STATUS_WORD": int(self.status_word),
        }
