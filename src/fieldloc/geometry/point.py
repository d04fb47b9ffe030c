"""
Point - Immutable 2D vector in field units (inches).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING

from .rotation import Rotation

if TYPE_CHECKING:
    from .position import Position


@dataclass(frozen=True)
class Point:
    """Immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def polar(cls, length: float, angle: Rotation) -> Point:
        """Vector of the given length pointing along angle."""
        return cls(length * angle.cos(), length * angle.sin())

    @classmethod
    def from_position(cls, position: Position) -> Point:
        """Drop the heading of a pose. Lossy on purpose."""
        return cls(position.x, position.y)

    def __add__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Point(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Point:
        return self * scalar

    def __truediv__(self, scalar: float) -> Point:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Point(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def hypot(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> float:
        """2D cross product (returns scalar z-component)."""
        return self.x * other.y - self.y * other.x

    def rotate(self, angle: Rotation) -> Point:
        """Rotate about the origin."""
        cos_a = angle.cos()
        sin_a = angle.sin()
        return Point(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
        )

    def dist(self, other: Point) -> float:
        return (other - self).hypot()

    def angle(self, other: Point) -> Rotation:
        """
        Bearing from this point to other.

        Coincident points give atan2(0, 0) = 0, which carries no
        direction; guard against that before relying on the result.
        """
        delta = other - self
        return Rotation(math.atan2(delta.y, delta.x))

    def __repr__(self) -> str:
        return f"Point(x={self.x:.2f} in, y={self.y:.2f} in)"
