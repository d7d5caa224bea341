# tests/test_phasor.py
import logging
import math

import pytest

from utils.pmu.phasor import ZERO_PHASOR, Phasor, PhasorStatus, normalize_angle

RMS_VALUES = [0.5, 1.0, 120.0, 250_000.0]
ANGLES = [-179.0, -135.0, -90.0, -30.0, 0.0, 45.0, 90.0, 135.0, 180.0]


@pytest.mark.parametrize("rms", RMS_VALUES)
@pytest.mark.parametrize("angle", ANGLES)
def test_polar_cartesian_round_trip(rms: float, angle: float) -> None:
    p = Phasor(rms, angle)
    q = Phasor.from_cartesian(p.real, p.imaginary)
    assert q.rms_value == pytest.approx(rms, rel=1e-12)
    assert q.phase_angle_degrees == pytest.approx(angle, abs=1e-9)


def test_polar_constructor_derives_cartesian() -> None:
    p = Phasor(2.0, 60.0)
    assert p.real == pytest.approx(1.0)
    assert p.imaginary == pytest.approx(math.sqrt(3.0))
    assert p.to_complex() == pytest.approx(complex(1.0, math.sqrt(3.0)))


@pytest.mark.parametrize(
    ("real", "imag", "angle"),
    [
        (0.0, 0.0, 0.0),
        (0.0, 2.0, 90.0),
        (0.0, -2.0, -90.0),
        (1.0, 1.0, 45.0),
        (-1.0, 1.0, 135.0),
        (-1.0, -1.0, -135.0),
        (1.0, -1.0, -45.0),
        (-1.0, 0.0, 180.0),
    ],
)
def test_from_cartesian_quadrants(real: float, imag: float, angle: float) -> None:
    p = Phasor.from_cartesian(real, imag)
    assert p.phase_angle_degrees == pytest.approx(angle)
    assert p.rms_value == pytest.approx(math.hypot(real, imag))


def test_add_then_subtract_is_identity() -> None:
    a = Phasor(3.0, 170.0)
    b = Phasor(7.5, -100.0)
    assert (a + b - b).is_close(a, abs_tol=1e-12)
    assert a.add(b).sub(b).is_close(a, abs_tol=1e-12)


def test_multiply_then_divide_is_identity() -> None:
    a = Phasor(3.0, 170.0)
    b = Phasor(2.0, 40.0)
    c = a * b / b
    assert c.rms_value == pytest.approx(3.0)
    assert c.phase_angle_degrees == pytest.approx(170.0)


def test_divide_by_itself_is_unity() -> None:
    a = Phasor(42.0, -73.0)
    quotient, status = a.divide(a)
    assert status is PhasorStatus.OK
    assert quotient == Phasor(1.0, 0.0)


def test_divide_by_zero_returns_zero_phasor(caplog: pytest.LogCaptureFixture) -> None:
    quotient, status = Phasor(5.0, 30.0).divide(Phasor(0.0, 0.0))
    assert status is PhasorStatus.DIVIDE_BY_ZERO
    assert quotient == ZERO_PHASOR

    with caplog.at_level(logging.WARNING, logger="utils.pmu.phasor"):
        result = Phasor(5.0, 30.0) / Phasor(0.0, 0.0)
    assert result == Phasor(0.0, 0.0)
    assert "Divisor phasor is 0" in caplog.text


def test_zero_to_non_positive_power_returns_zero_phasor(caplog: pytest.LogCaptureFixture) -> None:
    result, status = Phasor(0.0, 0.0).power(0)
    assert status is PhasorStatus.ZERO_TO_NON_POSITIVE_POWER
    assert result == ZERO_PHASOR

    _, status = Phasor(0.0, 0.0).power(-2.0)
    assert status is PhasorStatus.ZERO_TO_NON_POSITIVE_POWER

    with caplog.at_level(logging.WARNING, logger="utils.pmu.phasor"):
        assert Phasor(0.0, 0.0).pow(0) == ZERO_PHASOR
    assert "non-positive" in caplog.text


def test_zero_to_positive_power_is_fine() -> None:
    result, status = Phasor(0.0, 0.0).power(2.0)
    assert status is PhasorStatus.OK
    assert result.rms_value == 0.0


def test_power() -> None:
    p = Phasor(2.0, 100.0) ** 3
    assert p.rms_value == pytest.approx(8.0)
    assert p.phase_angle_degrees == pytest.approx(-60.0)

    root = Phasor(4.0, 90.0).pow(0.5)
    assert root.rms_value == pytest.approx(2.0)
    assert root.phase_angle_degrees == pytest.approx(45.0)


@pytest.mark.parametrize("a", [-179.0, -90.0, 0.0, 95.0, 180.0])
@pytest.mark.parametrize("b", [-179.5, -45.0, 0.0, 120.0, 180.0])
def test_polar_operations_keep_angle_in_range(a: float, b: float) -> None:
    pa = Phasor(1.5, a)
    pb = Phasor(2.0, b)
    for result in (pa * pb, pa / pb, pa**3, pb**-2.5):
        assert -180.0 < result.phase_angle_degrees <= 180.0


def test_normalize_angle() -> None:
    assert normalize_angle(180.0) == 180.0
    assert normalize_angle(-180.0) == 180.0
    assert normalize_angle(540.0) == 180.0
    assert normalize_angle(-721.0) == pytest.approx(-1.0)
    assert normalize_angle(359.0) == pytest.approx(-1.0)
    assert normalize_angle(1e6) == pytest.approx(-80.0)


@pytest.mark.parametrize("k", [1, 2, 3, -4, 7])
def test_large_angles_are_wrapped(k: int) -> None:
    angle = 1e6 * k + 0.25
    wrapped = normalize_angle(angle)
    assert -180.0 < wrapped <= 180.0
    assert Phasor(1.0, wrapped).is_close(Phasor(1.0, angle), abs_tol=1e-6)

    product = Phasor(2.0, angle) * Phasor(1.0, 0.0)
    assert -180.0 < product.phase_angle_degrees <= 180.0
    assert product.rms_value == pytest.approx(2.0)


def test_huge_exponent_returns_promptly() -> None:
    p = Phasor(1.0, 90.0) ** 1e17
    assert p.rms_value == 1.0
    assert -180.0 < p.phase_angle_degrees <= 180.0


def test_non_finite_angle_is_rejected() -> None:
    with pytest.raises(ValueError):
        normalize_angle(float("inf"))
    with pytest.raises(ValueError):
        normalize_angle(float("nan"))


@pytest.mark.parametrize(
    ("rms", "angle"),
    [(-1.0, 0.0), (float("nan"), 0.0), (float("inf"), 0.0), (1.0, float("nan"))],
)
def test_invalid_phasor_is_rejected(rms: float, angle: float) -> None:
    with pytest.raises(ValueError):
        Phasor(rms, angle)


def test_root_of_valid_phasor_stays_real() -> None:
    root = Phasor(9.0, -170.0) ** 0.5
    assert isinstance(root.rms_value, float)
    assert root.rms_value == pytest.approx(3.0)
    assert root.phase_angle_degrees == pytest.approx(-85.0)


def test_phasor_is_immutable() -> None:
    p = Phasor(1.0, 0.0)
    with pytest.raises(AttributeError):
        p.rms_value = 2.0  # type: ignore[misc]


def test_str() -> None:
    assert str(Phasor(5.0, 30.0)) == "5.000000 @ 30.000000deg"
