"""
Line - 2D segment, the raycasting primitive.
"""

from __future__ import annotations

from dataclasses import dataclass

from fieldloc.config import INTERSECT_EPSILON
from .point import Point
from .position import Position


@dataclass(frozen=True)
class Line:
    """Segment from a to b."""

    a: Point
    b: Point

    @classmethod
    def ray(cls, origin: Position, length: float) -> Line:
        """Segment starting at origin and running length along its heading."""
        if length < 0:
            raise ValueError(f"ray length must be non-negative, got {length}")
        start = origin.point()
        return cls(start, start + Point.polar(length, origin.theta))

    def direction(self) -> Point:
        return self.b - self.a

    def length(self) -> float:
        return self.a.dist(self.b)

    def intersect(self, other: Line) -> Point | None:
        """
        Intersection point of two segments.

        Solves a + t*r = c + u*s via 2D cross products. The hit only
        counts when both t and u lie in [0, 1], i.e. on both segments.

        Returns:
            Intersection point, or None if the segments are parallel,
            collinear or miss each other.
        """
        r = self.direction()
        s = other.direction()
        denom = r.cross(s)
        if abs(denom) < INTERSECT_EPSILON:
            return None

        offset = other.a - self.a
        t = offset.cross(s) / denom
        u = offset.cross(r) / denom
        if not (0.0 <= t <= 1.0 and 0.0 <= u <= 1.0):
            return None
        return self.a + r * t
