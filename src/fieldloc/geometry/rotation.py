"""
Rotation - A 2D angle stored in radians.

Normalization is always explicit. Arithmetic works on the raw angle so the
same type can hold an accumulated heading or an angular delta without
being wrapped behind the caller's back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fieldloc.config import ANGLE_ROUND_DIGITS, SINC_EPSILON


@dataclass(frozen=True, order=True)
class Rotation:
    """
    Angle in radians.

    Equality and ordering compare the raw stored value, so
    deg(360) != deg(0) until one of them is normalized.

    Usage:
        heading = Rotation.from_deg(90)
        heading += Rotation.from_deg(100)   # 190 deg, not wrapped
        heading.normalize().as_deg()        # -170.0
    """

    angle: float = 0.0  # radians

    @classmethod
    def from_deg(cls, degrees: float) -> Rotation:
        return cls(math.radians(degrees))

    @classmethod
    def from_rad(cls, radians: float) -> Rotation:
        return cls(float(radians))

    def as_deg(self) -> float:
        return math.degrees(self.angle)

    def as_rad(self) -> float:
        return self.angle

    # ── Normalization ───────────────────────────────────────────

    def normalize_with_cap(self, cap: Rotation) -> Rotation:
        """
        Wrap into the half-open interval (-cap, cap].

        Args:
            cap: Positive half-width of the target interval.

        Returns:
            Equivalent rotation inside the interval. Angles already
            inside are returned unchanged.
        """
        limit = cap.angle
        if limit <= 0:
            raise ValueError(f"cap must be positive, got {limit}")
        if -limit < self.angle <= limit:
            return self

        span = 2.0 * limit
        # Floored modulo keeps the remainder in [0, span) for negative inputs too
        wrapped = limit - ((limit - self.angle) % span) % span
        if wrapped <= -limit:
            wrapped += span
        return Rotation(wrapped)

    def normalize(self) -> Rotation:
        """Wrap into (-180, 180] degrees."""
        return self.normalize_with_cap(_HALF_TURN)

    def round(self, increment: Rotation) -> Rotation:
        """Snap to the nearest multiple of increment (compared in degrees)."""
        step = increment.as_deg()
        if step == 0:
            raise ValueError("increment must be non-zero")
        # rad <-> deg conversion noise must not tip exact halves
        steps = round(self.as_deg() / step, ANGLE_ROUND_DIGITS)
        # Halves go away from zero
        nearest = math.copysign(math.floor(abs(steps) + 0.5), steps)
        return Rotation.from_deg(round(nearest * step, ANGLE_ROUND_DIGITS))

    # ── Trigonometry ────────────────────────────────────────────

    def abs(self) -> Rotation:
        return Rotation(abs(self.angle))

    def sin(self) -> float:
        return math.sin(self.angle)

    def cos(self) -> float:
        return math.cos(self.angle)

    def tan(self) -> float:
        return math.tan(self.angle)

    def sinc(self) -> float:
        """sin(x)/x, with the removable singularity at zero filled in."""
        if abs(self.angle) < SINC_EPSILON:
            return 1.0
        return math.sin(self.angle) / self.angle

    # ── Arithmetic ──────────────────────────────────────────────

    def __add__(self, other: Rotation) -> Rotation:
        if not isinstance(other, Rotation):
            return NotImplemented
        return Rotation(self.angle + other.angle)

    def __sub__(self, other: Rotation) -> Rotation:
        if not isinstance(other, Rotation):
            return NotImplemented
        return Rotation(self.angle - other.angle)

    def __mul__(self, scalar: float) -> Rotation:
        if isinstance(scalar, Rotation):
            return NotImplemented
        return Rotation(self.angle * scalar)

    def __rmul__(self, scalar: float) -> Rotation:
        return self * scalar

    def __truediv__(self, other):
        # Rotation / Rotation is a plain ratio
        if isinstance(other, Rotation):
            return self.angle / other.angle
        return Rotation(self.angle / other)

    def __neg__(self) -> Rotation:
        return Rotation(-self.angle)

    def __abs__(self) -> Rotation:
        return self.abs()

    def __repr__(self) -> str:
        return f"Rotation({self.as_deg():.3f}°)"


_HALF_TURN = Rotation.from_deg(180)


def deg(degrees: float) -> Rotation:
    """Shorthand for Rotation.from_deg."""
    return Rotation.from_deg(degrees)


def rad(radians: float) -> Rotation:
    """Shorthand for Rotation.from_rad."""
    return Rotation.from_rad(radians)
