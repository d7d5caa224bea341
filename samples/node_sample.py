# samples/node_sample.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from utils.pmu.parameter import GROUND, Parameter
from utils.pmu.phasor import Phasor

__all__ = ["DEFAULT_RATED_VOLTAGE", "DEFAULT_RATED_CURRENT", "NodeSample"]

DEFAULT_RATED_VOLTAGE = 250_000.0  # V
DEFAULT_RATED_CURRENT = 25.0  # A


@dataclass(frozen=True, slots=True)
class NodeSample:
    """
    One grid node at one time slice: its voltage and every current leaving it.

    Line samples hold references to node samples; a node sample is never
    modified after construction, so one instance may back several lines.
    """

    node_number: int
    voltage: Parameter
    currents: tuple[Parameter, ...]
    rated_voltage: float = DEFAULT_RATED_VOLTAGE
    rated_current: float = DEFAULT_RATED_CURRENT

    def __post_init__(self) -> None:
        if self.node_number <= GROUND:
            raise ValueError(f"node_number must be > 0, got {self.node_number}")
        if self.rated_voltage <= 0.0 or self.rated_current <= 0.0:
            raise ValueError("rated_voltage and rated_current must be > 0")
        if self.voltage.start_node != self.node_number:
            raise ValueError(
                f"voltage {self.voltage.name!r} starts at node {self.voltage.start_node}, "
                f"expected {self.node_number}"
            )

        seen: set[int] = set()
        for current in self.currents:
            if current.start_node != self.node_number:
                raise ValueError(
                    f"current {current.name!r} starts at node {current.start_node}, "
                    f"expected {self.node_number}"
                )
            if current.destination_node in seen:
                raise ValueError(
                    f"node {self.node_number} has two currents towards node "
                    f"{current.destination_node}"
                )
            seen.add(current.destination_node)

    @classmethod
    def from_phasors(
        cls,
        node_number: int,
        voltage: Phasor,
        currents: Iterable[tuple[Phasor, int]],
        rated_voltage: float = DEFAULT_RATED_VOLTAGE,
        rated_current: float = DEFAULT_RATED_CURRENT,
    ) -> NodeSample:
        """
        Build a node from phasors, naming the parameters V<node> and
        I<node><destination>.

        currents: (phasor, destination_node) pairs, in the order they should
        keep in the line samples.
        """
        v = Parameter.from_phasor(voltage, f"V{node_number}", "V", node_number, GROUND)
        i = tuple(
            Parameter.from_phasor(phasor, f"I{node_number}{dest}", "A", node_number, dest)
            for phasor, dest in currents
        )
        return cls(node_number, v, i, rated_voltage, rated_current)

    @classmethod
    def from_parameters(
        cls,
        node_number: int,
        voltage: Parameter,
        currents: Sequence[Parameter],
        rated_voltage: float = DEFAULT_RATED_VOLTAGE,
        rated_current: float = DEFAULT_RATED_CURRENT,
    ) -> NodeSample:
        return cls(node_number, voltage, tuple(currents), rated_voltage, rated_current)

    @property
    def number_of_currents(self) -> int:
        return len(self.currents)

    def current_to(self, destination_node: int) -> Parameter | None:
        for current in self.currents:
            if current.destination_node == destination_node:
                return current
        return None

    def describe(self) -> str:
        lines = [f"Node {self.node_number}", f"{self.voltage.name} = {self.voltage.phasor}V"]
        lines += [f"{c.name} = {c.phasor}A" for c in self.currents]
        lines.append(f"Rated Voltage: {self.rated_voltage:.6f}V")
        lines.append(f"Rated Current: {self.rated_current:.6f}A")
        return "\n".join(lines)
