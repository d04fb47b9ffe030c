"""
Position - Rigid 2D pose (point + heading) in the field frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .point import Point
from .rotation import Rotation


@dataclass(frozen=True)
class Position:
    """
    Robot or sensor pose.

    theta is the heading of the body frame relative to the field frame,
    0 along +x, counter-clockwise positive.
    """

    x: float = 0.0  # inches
    y: float = 0.0  # inches
    theta: Rotation = field(default_factory=Rotation)

    @classmethod
    def origin(cls) -> Position:
        return cls(0.0, 0.0, Rotation())

    def point(self) -> Point:
        """Translational part only."""
        return Point(self.x, self.y)

    def rotate(self, angle: Rotation) -> Position:
        """
        Rotate about the field origin, not about this pose's own position.

        The translation is rotated and angle is added to theta.
        """
        rotated = self.point().rotate(angle)
        return Position(rotated.x, rotated.y, self.theta + angle)

    def transform(self, local: Position) -> Position:
        """
        Express a pose given in this body's frame in the field frame.

        Used to place a sensor mounting offset onto a robot pose.
        """
        return local.rotate(self.theta) + self.point()

    def __add__(self, other: Point) -> Position:
        if not isinstance(other, Point):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y, self.theta)

    def __sub__(self, other: Point) -> Position:
        if not isinstance(other, Point):
            return NotImplemented
        return Position(self.x - other.x, self.y - other.y, self.theta)

    def __repr__(self) -> str:
        return f"Position(x={self.x:.2f} in, y={self.y:.2f} in, theta={self.theta.as_deg():.1f}°)"
