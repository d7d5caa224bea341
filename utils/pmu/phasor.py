# utils/pmu/phasor.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import IntFlag

__all__ = ["PhasorStatus", "Phasor", "ZERO_PHASOR", "normalize_angle"]

logger = logging.getLogger(__name__)


class PhasorStatus(IntFlag):
    OK = 0x0000
    DIVIDE_BY_ZERO = 0x0001
    ZERO_TO_NON_POSITIVE_POWER = 0x0002
    INSUFFICIENT_SAMPLES = 0x0004


def normalize_angle(angle_deg: float) -> float:
    """Wrap an angle into (-180, 180] degrees."""
    if not math.isfinite(angle_deg):
        raise ValueError(f"angle must be finite, got {angle_deg}")
    # fmod keeps the sign: result in (-360, 360)
    angle_deg = math.fmod(angle_deg, 360.0)
    if angle_deg > 180.0:
        angle_deg -= 360.0
    elif angle_deg <= -180.0:
        angle_deg += 360.0
    return angle_deg


@dataclass(frozen=True, slots=True)
class Phasor:
    """
    RMS magnitude and phase angle (degrees) of a sinusoidal quantity.

    The cartesian pair is derived once at construction, so every instance
    carries a consistent polar and cartesian form.
    """

    rms_value: float = 0.0
    phase_angle_degrees: float = 0.0
    real: float = field(init=False, repr=False, compare=False)
    imaginary: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.rms_value) and math.isfinite(self.phase_angle_degrees)):
            raise ValueError(f"Non-finite phasor: {self.rms_value!r} @ {self.phase_angle_degrees!r}deg")
        if self.rms_value < 0.0:
            raise ValueError(f"rms_value must be >= 0, got {self.rms_value}")

        theta = math.radians(self.phase_angle_degrees)
        object.__setattr__(self, "real", self.rms_value * math.cos(theta))
        object.__setattr__(self, "imaginary", self.rms_value * math.sin(theta))

    # ---- constructors -------------------------------------------------------

    @classmethod
    def from_cartesian(cls, real: float, imaginary: float) -> Phasor:
        rms = math.hypot(real, imaginary)

        if real == 0.0:
            # on the imaginary axis (or the zero phasor)
            if imaginary < 0.0:
                angle = -90.0
            elif imaginary > 0.0:
                angle = 90.0
            else:
                angle = 0.0
        else:
            angle = math.degrees(math.atan(imaginary / real))
            if real < 0.0:
                # atan folds Q2 onto Q4 and Q3 onto Q1
                angle += 180.0 if imaginary >= 0.0 else -180.0

        return cls(rms, angle)

    @classmethod
    def from_complex(cls, z: complex) -> Phasor:
        return cls.from_cartesian(z.real, z.imag)

    def to_complex(self) -> complex:
        return complex(self.real, self.imaginary)

    # ---- arithmetic -----------------------------------------------------------

    def add(self, other: Phasor) -> Phasor:
        return Phasor.from_cartesian(self.real + other.real, self.imaginary + other.imaginary)

    def sub(self, other: Phasor) -> Phasor:
        return Phasor.from_cartesian(self.real - other.real, self.imaginary - other.imaginary)

    def mul(self, other: Phasor) -> Phasor:
        return Phasor(
            self.rms_value * other.rms_value,
            normalize_angle(self.phase_angle_degrees + other.phase_angle_degrees),
        )

    def divide(self, other: Phasor) -> tuple[Phasor, PhasorStatus]:
        """
        Quotient of two phasors.

        Returns
        -------
        (quotient, status): tuple[Phasor, PhasorStatus]
            status is DIVIDE_BY_ZERO (and quotient the zero phasor) when the
            divisor has zero magnitude.
        """
        if other.rms_value == 0.0:
            return ZERO_PHASOR, PhasorStatus.DIVIDE_BY_ZERO

        quotient = Phasor(
            self.rms_value / other.rms_value,
            normalize_angle(self.phase_angle_degrees - other.phase_angle_degrees),
        )
        return quotient, PhasorStatus.OK

    def power(self, exponent: float) -> tuple[Phasor, PhasorStatus]:
        """
        Raise the phasor to a real power.

        A zero phasor raised to a non-positive power has no finite value; the
        zero phasor is returned with status ZERO_TO_NON_POSITIVE_POWER.
        """
        if self.rms_value == 0.0 and exponent <= 0.0:
            return ZERO_PHASOR, PhasorStatus.ZERO_TO_NON_POSITIVE_POWER

        result = Phasor(
            self.rms_value**exponent,
            normalize_angle(self.phase_angle_degrees * exponent),
        )
        return result, PhasorStatus.OK

    def div(self, other: Phasor) -> Phasor:
        quotient, status = self.divide(other)
        if status is not PhasorStatus.OK:
            logger.warning("Divisor phasor is 0: %s / %s", self, other)
        return quotient

    def pow(self, exponent: float) -> Phasor:
        result, status = self.power(exponent)
        if status is not PhasorStatus.OK:
            logger.warning("Base phasor is 0 and power %s is non-positive", exponent)
        return result

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div
    __pow__ = pow

    # ---- helpers ----------------------------------------------------------------

    def is_close(self, other: Phasor, abs_tol: float = 1e-9) -> bool:
        """Compare in the complex plane, so 180deg and -180deg match."""
        return (self - other).rms_value <= abs_tol

    def __str__(self) -> str:
        return f"{self.rms_value:.6f} @ {self.phase_angle_degrees:.6f}deg"


ZERO_PHASOR = Phasor(0.0, 0.0)
