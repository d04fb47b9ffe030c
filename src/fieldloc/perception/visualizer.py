"""
Field visualizer - Renders poses and sensor rays as OpenCV images.

Top-down view of the field: walls, robot pose, each sensor's predicted
ray with its hit point, and the measured reading when one is given.
Field +y points up in the image.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import cv2
import numpy as np

from fieldloc.geometry import Line, Point, Position
from .field import Field

if TYPE_CHECKING:
    from fieldloc.sensors.distance import DistanceSensorModel


# Colors (BGR)
_WHITE = (255, 255, 255)
_GRAY = (120, 120, 120)
_DARK_GRAY = (40, 40, 40)
_CYAN = (255, 255, 0)
_GREEN = (0, 220, 0)
_YELLOW = (0, 220, 220)
_ORANGE = (0, 140, 255)


class FieldVisualizer:
    """Renders a field, a robot pose and distance sensor rays."""

    def __init__(self, field: Field, size: int = 600, margin: int = 20, grid_step: float = 24.0):
        self.field = field
        self.size = size
        self.margin = margin
        self.grid_step = grid_step  # inches between grid lines (one tile)

        lo, hi = field.bounds()
        self._origin = lo
        extent = max(hi.x - lo.x, hi.y - lo.y) or 1.0
        self._scale = (size - 2 * margin) / extent  # px per inch

    # ── Public API ──────────────────────────────────────────────

    def render(self, bot: Position | None, sensors: Sequence[DistanceSensorModel] = (), measured: Sequence[float | None] | None = None) -> np.ndarray:
        """Render a top-down BGR image.

        Args:
            bot: Robot pose (None draws the field only).
            sensors: Sensor models whose rays are drawn.
            measured: Optional measured distance per sensor (inches),
                drawn as a marker along the ray.

        Returns:
            BGR image of shape (size, size, 3).
        """
        image = np.zeros((self.size, self.size, 3), dtype=np.uint8)
        self._draw_grid(image)

        for wall in self.field:
            cv2.line(image, self._to_px(wall.a), self._to_px(wall.b), _WHITE, 2)

        if bot is None:
            self._put_text(image, "No pose", (8, 18), _GRAY)
            return image

        for i, sensor in enumerate(sensors):
            reading = measured[i] if measured is not None and i < len(measured) else None
            self._draw_sensor(image, sensor, bot, reading)

        self._draw_robot(image, bot)
        self._put_text(
            image,
            f"x={bot.x:.1f} y={bot.y:.1f} th={bot.theta.as_deg():.1f}",
            (8, 18), _WHITE,
        )
        return image

    def render_jpeg(self, bot: Position | None, sensors: Sequence[DistanceSensorModel] = (), measured: Sequence[float | None] | None = None, quality: int = 80) -> bytes:
        """render() encoded as JPEG bytes (empty on encode failure)."""
        return self._encode(self.render(bot, sensors, measured), quality)

    # ── Helpers ─────────────────────────────────────────────────

    def _to_px(self, point: Point) -> tuple[int, int]:
        """Field inches to pixel coords, y flipped."""
        x = self.margin + (point.x - self._origin.x) * self._scale
        y = self.size - self.margin - (point.y - self._origin.y) * self._scale
        return int(round(x)), int(round(y))

    def _draw_grid(self, image: np.ndarray) -> None:
        if self.grid_step <= 0:
            return
        lo, hi = self.field.bounds()
        x = lo.x + self.grid_step
        while x < hi.x:
            cv2.line(image, self._to_px(Point(x, lo.y)), self._to_px(Point(x, hi.y)), _DARK_GRAY, 1)
            x += self.grid_step
        y = lo.y + self.grid_step
        while y < hi.y:
            cv2.line(image, self._to_px(Point(lo.x, y)), self._to_px(Point(hi.x, y)), _DARK_GRAY, 1)
            y += self.grid_step

    def _draw_robot(self, image: np.ndarray, bot: Position) -> None:
        center = self._to_px(bot.point())
        nose = self._to_px(Line.ray(bot, 6.0).b)
        cv2.circle(image, center, 8, _GREEN, 2)
        cv2.arrowedLine(image, center, nose, _GREEN, 2, tipLength=0.4)

    def _draw_sensor(self, image: np.ndarray, sensor: DistanceSensorModel, bot: Position, measured: float | None) -> None:
        pose = sensor.sensor_pose(bot)
        start = self._to_px(pose.point())
        predicted = sensor.predict(bot)

        if predicted is None:
            # Nothing hit: draw the whole ray dimmed
            end = self._to_px(Line.ray(pose, sensor.ray_length).b)
            cv2.line(image, start, end, _GRAY, 1)
        else:
            hit = self._to_px(Line.ray(pose, predicted).b)
            cv2.line(image, start, hit, _CYAN, 1)
            cv2.circle(image, hit, 4, _CYAN, -1)
            self._put_text(image, f"{predicted:.1f}", (hit[0] + 6, hit[1] - 6), _CYAN)

        if measured is not None:
            marker = self._to_px(Line.ray(pose, measured).b)
            cv2.drawMarker(image, marker, _ORANGE, cv2.MARKER_TILTED_CROSS, 10, 2)

        cv2.circle(image, start, 3, _YELLOW, -1)

    @staticmethod
    def _put_text(image: np.ndarray, text: str, pos: tuple[int, int], color: tuple) -> None:
        cv2.putText(image, text, pos, cv2.FONT_HERSHEY_SIMPLEX, 0.45, color, 1)

    @staticmethod
    def _encode(image: np.ndarray, quality: int = 80) -> bytes:
        ret, jpeg = cv2.imencode(
            ".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, quality],
        )
        if not ret:
            return b""
        return jpeg.tobytes()
