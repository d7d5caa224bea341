from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Dict

from utils.pmu.measurement import InstantaneousMeasurement
from utils.pmu.phasor import Phasor, PhasorStatus


class EstimatorBase:
    """Base class for all phasor estimators working on a recorded waveform."""

    def __init__(self, config: Any = None, name: str = "") -> None:
        """
        Initializes the estimator with fixed parameters.
        :param config: Mapping or attribute object with estimator settings.
        :param name: Label used in logs and result files.
        """
        self.name: str = name
        self.memory: Dict[str, Any] = {}
        self.config: Any = {} if config is None else config
        self.status_word: PhasorStatus = PhasorStatus.OK

    def _cfg(self, key: str, default: Any) -> Any:
        config = self.config
        return getattr(config, key, default) if hasattr(config, key) else config.get(key, default)

    def reset(self) -> None:
        """Reset internal state (cached values, last status, etc.)."""
        self.memory.clear()
        self.status_word = PhasorStatus.OK

    def estimate(self, samples: Sequence[InstantaneousMeasurement]) -> tuple[Phasor, PhasorStatus]:
        """
        Estimate the phasor of a record of time-tagged samples.
        Returns the phasor with the status word describing the result.
        """
        if not all(isinstance(s, InstantaneousMeasurement) for s in samples):
            raise TypeError("estimate() requires a sequence of InstantaneousMeasurement.")

        # Implementation in derived classes.
        raise NotImplementedError
