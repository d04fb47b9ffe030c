"""
Geometry Layer - 2D pose algebra.

- Rotation: explicit-normalization angle
- Point: 2D vector
- Position: pose (point + heading)
- Line: segment intersection for raycasting
"""

from .rotation import Rotation, deg, rad
from .point import Point
from .position import Position
from .line import Line

__all__ = ["Rotation", "deg", "rad", "Point", "Position", "Line"]
