"""
Field - Boundary walls of the playing field.

The field is supplied once as an ordered collection of wall segments
(inches) and treated as read-only afterwards, so raycasts can run from
several candidate poses at once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from fieldloc.config import FIELD_SIZE
from fieldloc.geometry import Line, Point

logger = logging.getLogger(__name__)


class Field:
    """
    Ordered, immutable set of wall segments.

    Usage:
        field = Field.rectangle(144.0, 144.0)
        hit = field.raycast(Line.ray(sensor_pose, 400.0))
    """

    def __init__(self, walls: Iterable[Line]):
        self._walls: tuple[Line, ...] = tuple(walls)
        if not self._walls:
            raise ValueError("Field needs at least one wall")

        # (N, 2) array of every wall endpoint, for bounds queries
        self._corners = np.array(
            [(p.x, p.y) for wall in self._walls for p in (wall.a, wall.b)],
            dtype=np.float64,
        )
        logger.debug(f"Field created with {len(self._walls)} walls")

    @classmethod
    def rectangle(cls, width: float = FIELD_SIZE, height: float = FIELD_SIZE, center: Point | None = None) -> Field:
        """Closed axis-aligned rectangle centered on center (default origin)."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Field size must be positive, got {width}x{height}")
        c = center if center is not None else Point()
        hw, hh = width / 2.0, height / 2.0
        bl = Point(c.x - hw, c.y - hh)
        br = Point(c.x + hw, c.y - hh)
        tr = Point(c.x + hw, c.y + hh)
        tl = Point(c.x - hw, c.y + hh)
        return cls([Line(bl, br), Line(br, tr), Line(tr, tl), Line(tl, bl)])

    @classmethod
    def from_segments(cls, segments: Iterable[Sequence[Sequence[float]]]) -> Field:
        """Build from ((x1, y1), (x2, y2)) pairs."""
        return cls(
            Line(Point(float(a[0]), float(a[1])), Point(float(b[0]), float(b[1])))
            for a, b in segments
        )

    @property
    def walls(self) -> tuple[Line, ...]:
        return self._walls

    def __len__(self) -> int:
        return len(self._walls)

    def __iter__(self):
        return iter(self._walls)

    def bounds(self) -> tuple[Point, Point]:
        """(min corner, max corner) of the axis-aligned bounding box."""
        lo = self._corners.min(axis=0)
        hi = self._corners.max(axis=0)
        return Point(float(lo[0]), float(lo[1])), Point(float(hi[0]), float(hi[1]))

    def diagonal(self) -> float:
        """Length of the bounding box diagonal."""
        extent = np.ptp(self._corners, axis=0)
        return float(np.hypot(extent[0], extent[1]))

    def raycast(self, ray: Line) -> float | None:
        """
        Distance from ray.a to the closest wall hit along the ray.

        Every wall is checked and the minimum kept, so wall order never
        changes the answer.

        Returns:
            Distance in inches, or None if no wall is crossed.
        """
        best: float | None = None
        for wall in self._walls:
            hit = ray.intersect(wall)
            if hit is None:
                continue
            distance = ray.a.dist(hit)
            if best is None or distance < best:
                best = distance
        return best
