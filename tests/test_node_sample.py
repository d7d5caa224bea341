# tests/test_node_sample.py
import pytest

from samples.node_sample import DEFAULT_RATED_CURRENT, DEFAULT_RATED_VOLTAGE, NodeSample
from scenarios.s1_synthetic.make_clean import sample_phasor
from utils.pmu.parameter import Parameter
from utils.pmu.phasor import Phasor


def test_from_phasors_names_and_tags_parameters() -> None:
    node = NodeSample.from_phasors(
        1,
        Phasor(250_000.0, 15.0),
        [(Phasor(25.0, 165.0), 0), (Phasor(25.0, -15.0), 2), (Phasor(5.0, 10.0), 3)],
    )

    assert node.node_number == 1
    assert node.voltage.name == "V1"
    assert node.voltage.units == "V"
    assert node.voltage.node_pair == (1, 0)

    assert node.number_of_currents == 3
    assert [c.name for c in node.currents] == ["I10", "I12", "I13"]
    assert [c.node_pair for c in node.currents] == [(1, 0), (1, 2), (1, 3)]
    assert all(c.units == "A" for c in node.currents)

    assert node.rated_voltage == DEFAULT_RATED_VOLTAGE == 250_000.0
    assert node.rated_current == DEFAULT_RATED_CURRENT == 25.0


def test_from_parameters_with_estimated_phasors() -> None:
    v = Parameter.from_samples(sample_phasor(Phasor(245_000.0, 13.0)), "V2", "V", 2, 0)
    i = Parameter.from_samples(sample_phasor(Phasor(25.0, -165.0)), "I21", "A", 2, 1)

    node = NodeSample.from_parameters(2, v, [i], rated_voltage=500_000.0, rated_current=50.0)

    assert node.current_to(1) is i
    assert node.current_to(3) is None
    assert node.rated_voltage == 500_000.0
    assert node.voltage.number_of_samples == 32000


def test_current_must_start_at_node() -> None:
    v = Parameter.from_phasor(Phasor(1.0, 0.0), "V1", "V", 1, 0)
    stray = Parameter.from_phasor(Phasor(1.0, 0.0), "I21", "A", 2, 1)
    with pytest.raises(ValueError, match="starts at node 2"):
        NodeSample.from_parameters(1, v, [stray])


def test_voltage_must_start_at_node() -> None:
    v = Parameter.from_phasor(Phasor(1.0, 0.0), "V2", "V", 2, 0)
    with pytest.raises(ValueError):
        NodeSample.from_parameters(1, v, [])


def test_duplicate_destination_is_rejected() -> None:
    with pytest.raises(ValueError, match="two currents towards node 2"):
        NodeSample.from_phasors(1, Phasor(1.0, 0.0), [(Phasor(1.0, 0.0), 2), (Phasor(2.0, 0.0), 2)])


@pytest.mark.parametrize("node_number", [0, -3])
def test_node_number_must_be_positive(node_number: int) -> None:
    with pytest.raises(ValueError):
        NodeSample.from_phasors(node_number, Phasor(1.0, 0.0), [])


def test_ratings_must_be_positive() -> None:
    with pytest.raises(ValueError):
        NodeSample.from_phasors(1, Phasor(1.0, 0.0), [], rated_current=0.0)


def test_describe() -> None:
    node = NodeSample.from_phasors(1, Phasor(250_000.0, 15.0), [(Phasor(25.0, -15.0), 2)])
    text = node.describe()
    assert text.startswith("Node 1")
    assert "V1 = 250000.000000 @ 15.000000degV" in text
    assert "I12 = 25.000000 @ -15.000000degA" in text
    assert "Rated Current: 25.000000A" in text
