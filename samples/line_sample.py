# samples/line_sample.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from samples.node_sample import NodeSample
from utils.pmu.parameter import Parameter

__all__ = ["LineConnectionError", "LineSample"]

logger = logging.getLogger(__name__)


class LineConnectionError(ValueError):
    """The two node samples carry no current towards each other."""


def _line_current(node: NodeSample, other: NodeSample, label: str) -> Parameter:
    current = node.current_to(other.node_number)
    if current is None:
        msg = (
            f"Unable to find a current in {label} (node {node.node_number}) "
            f"going to node {other.node_number}"
        )
        logger.error(msg)
        raise LineConnectionError(msg)
    return current


def _other_currents_norm(node: NodeSample, line_current: Parameter) -> tuple[Parameter, ...]:
    # order preserved; comparability checks rely on it
    return tuple(
        c.normalized(node.rated_current)
        for c in node.currents
        if c.destination_node != line_current.destination_node
    )


@dataclass(frozen=True, slots=True)
class LineSample:
    """
    Per-unit features of the line between node1 and node2 with a known or
    assumed status.

    Currents are divided by the owning node's rated current and voltages by
    its rated voltage. Construction raises LineConnectionError when either
    node has no current towards the other.
    """

    node1: NodeSample
    node2: NodeSample
    is_working: bool
    node1_line_current_norm: Parameter = field(init=False)
    node2_line_current_norm: Parameter = field(init=False)
    node1_voltage_norm: Parameter = field(init=False)
    node2_voltage_norm: Parameter = field(init=False)
    node1_other_currents_norm: tuple[Parameter, ...] = field(init=False)
    node2_other_currents_norm: tuple[Parameter, ...] = field(init=False)

    def __post_init__(self) -> None:
        n1, n2 = self.node1, self.node2

        line1 = _line_current(n1, n2, "node1")
        line2 = _line_current(n2, n1, "node2")

        derived = {
            "node1_line_current_norm": line1.normalized(n1.rated_current),
            "node2_line_current_norm": line2.normalized(n2.rated_current),
            "node1_voltage_norm": n1.voltage.normalized(n1.rated_voltage),
            "node2_voltage_norm": n2.voltage.normalized(n2.rated_voltage),
            "node1_other_currents_norm": _other_currents_norm(n1, line1),
            "node2_other_currents_norm": _other_currents_norm(n2, line2),
        }
        for key, value in derived.items():
            object.__setattr__(self, key, value)

    @property
    def number_of_node1_other_currents(self) -> int:
        return len(self.node1_other_currents_norm)

    @property
    def number_of_node2_other_currents(self) -> int:
        return len(self.node2_other_currents_norm)

    def describe(self) -> str:
        parts = [
            "Node 1:",
            self.node1.describe(),
            "",
            "Node 2:",
            self.node2.describe(),
            "",
            f"Line status: {self.is_working}",
            "Node 1 Normalized Line Current:",
            self.node1_line_current_norm.describe(),
            "Node 2 Normalized Line Current:",
            self.node2_line_current_norm.describe(),
            "Node 1 Normalized Node Voltage:",
            self.node1_voltage_norm.describe(),
            "Node 2 Normalized Node Voltage:",
            self.node2_voltage_norm.describe(),
            "Node 1 Normalized Other Currents:",
            *(p.describe() for p in self.node1_other_currents_norm),
            "Node 2 Normalized Other Currents:",
            *(p.describe() for p in self.node2_other_currents_norm),
        ]
        return "\n".join(parts)
