# scenarios/s1_synthetic/line_status.py
from __future__ import annotations

from dataclasses import dataclass

from samples.line_sample import LineSample
from samples.node_sample import NodeSample
from utils.pmu.parameter import GROUND
from utils.pmu.phasor import Phasor


@dataclass(frozen=True)
class NodeProfile:
    """Average voltage and currents of a node in one line state."""

    voltage: Phasor
    currents: tuple[tuple[Phasor, int], ...]  # (phasor, destination node)

    def scaled(self, node_number: int, factor: float) -> NodeSample:
        s = Phasor(factor, 0.0)
        return NodeSample.from_phasors(
            node_number,
            self.voltage * s,
            [(phasor * s, dest) for phasor, dest in self.currents],
        )


@dataclass(frozen=True)
class LineScenarioConfig:
    """Two nodes joined by one line, with working and open-line averages."""

    node1: int = 1
    node2: int = 2
    node1_working: NodeProfile = NodeProfile(
        Phasor(250_000.0, 15.0),
        ((Phasor(25.0, 165.0), GROUND), (Phasor(25.0, -15.0), 2)),
    )
    node1_not_working: NodeProfile = NodeProfile(
        Phasor(50_000.0, -150.0),
        ((Phasor(250.0, -70.0), GROUND), (Phasor(250.0, 110.0), 2)),
    )
    node2_working: NodeProfile = NodeProfile(
        Phasor(250_000.0, 15.0),
        ((Phasor(25.0, -15.0), 1), (Phasor(25.0, 165.0), GROUND)),
    )
    node2_not_working: NodeProfile = NodeProfile(
        Phasor(75_000.0, -120.0),
        ((Phasor(250.0, 70.0), 1), (Phasor(250.0, -110.0), GROUND)),
    )


# Module-level default (OK for B008)
DEFAULT_LINE_SCENARIO_CFG = LineScenarioConfig()


def _spread(index: int, count: int) -> float:
    """Scaling 0.9 .. <1.1 spread evenly over `count` samples."""
    return 0.9 + 0.2 * float(index) / float(count)


def make_known_line_samples(
    n_working: int = 6,
    n_not_working: int = 4,
    cfg: LineScenarioConfig | None = None,
) -> list[LineSample]:
    """
    Known-status line samples: `n_working` energized samples followed by
    `n_not_working` open-line samples, each a scaled copy of the averages.
    """
    cfg = DEFAULT_LINE_SCENARIO_CFG if cfg is None else cfg
    if n_working < 0 or n_not_working < 0:
        raise ValueError("sample counts must be >= 0")

    out: list[LineSample] = []
    for i in range(n_working):
        f = _spread(i, n_working)
        out.append(
            LineSample(cfg.node1_working.scaled(cfg.node1, f), cfg.node2_working.scaled(cfg.node2, f), True)
        )
    for i in range(n_not_working):
        f = _spread(i, n_not_working)
        out.append(
            LineSample(
                cfg.node1_not_working.scaled(cfg.node1, f),
                cfg.node2_not_working.scaled(cfg.node2, f),
                False,
            )
        )
    return out


def make_unknown_line_sample(
    working: bool = True, cfg: LineScenarioConfig | None = None
) -> LineSample:
    """Unknown-status sample built from the averages of the chosen state."""
    cfg = DEFAULT_LINE_SCENARIO_CFG if cfg is None else cfg
    p1 = cfg.node1_working if working else cfg.node1_not_working
    p2 = cfg.node2_working if working else cfg.node2_not_working
    # the flag is not used for prediction, only carried along
    return LineSample(p1.scaled(cfg.node1, 1.0), p2.scaled(cfg.node2, 1.0), working)
