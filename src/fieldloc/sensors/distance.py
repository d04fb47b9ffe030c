"""
Distance sensor model - Filtered reading and field-geometry prediction.

Two independent queries:
- get(): read the live sensor and drop untrustworthy readings
- predict(bot): raycast what the sensor should read from a candidate pose

A localization filter compares the two to score candidate poses. Every
failure is returned as None, meaning "skip this update", never zero.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fieldloc.config import MM_PER_INCH, RAY_LENGTH_FACTOR
from fieldloc.drivers import DistanceDriver
from fieldloc.geometry import Line, Position
from fieldloc.params import Parameters
from fieldloc.perception.field import Field

logger = logging.getLogger(__name__)

# Ray must outrun the field diagonal by this much to always reach a wall
_MIN_RAY_FACTOR = 1.5


class DistanceSensorModel:
    """
    One distance sensor mounted on the robot.

    Usage:
        params = Parameters.load()
        field = Field.rectangle()
        sensor = DistanceSensorModel(
            driver=SerialDistanceDriver(sensor_port=3),
            offset=Position(6.0, 0.0, deg(0)),   # 6in forward, facing forward
            field=field,
            params=params,
        )

        measured = sensor.get()            # inches or None
        expected = sensor.predict(pose)    # inches or None
    """

    def __init__(
        self,
        driver: DistanceDriver,
        offset: Position,
        field: Field,
        params: Parameters | None = None,
        ray_length: float | None = None,
        enabled: bool = True,
    ):
        self.driver = driver
        self.offset = offset
        self.field = field
        self.params = params or Parameters()
        self._enabled = enabled

        self._diagonal = field.diagonal()
        self._ray_length = ray_length
        self._warned_factor: float | None = None
        if ray_length is not None and ray_length <= self._diagonal * _MIN_RAY_FACTOR:
            logger.warning(
                f"Ray length {ray_length:.1f}in may not reach every wall "
                f"(field diagonal {self._diagonal:.1f}in)"
            )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool):
        value = bool(value)
        if value != self._enabled:
            logger.info(f"Distance sensor {'enabled' if value else 'disabled'}")
        self._enabled = value

    @property
    def ray_length(self) -> float:
        """Projection length in inches."""
        if self._ray_length is not None:
            return self._ray_length
        factor = self.params.ray_length_factor
        if factor <= _MIN_RAY_FACTOR:
            # Warn once per bad value
            if factor != self._warned_factor:
                logger.warning(f"ray_length_factor {factor} too short, using {RAY_LENGTH_FACTOR}")
                self._warned_factor = factor
            factor = RAY_LENGTH_FACTOR
        return self._diagonal * factor

    def get(self) -> float | None:
        """
        Read the sensor and filter it.

        A reading passes when it is both visible and valid:
            visible: object size unknown (sentinel), above the size
                     threshold, or the target is very close
            valid:   distance within the sensor's reliable range

        Returns:
            Distance in inches, or None if disabled, errored or filtered.
        """
        if not self._enabled:
            return None

        distance_mm = self.driver.distance()
        if distance_mm is None:
            logger.debug("Distance sensor: no data")
            return None

        size = self.driver.object_size()
        params = self.params
        visible = (
            size is None
            or size > params.distance_visible_size
            or distance_mm < params.distance_close_mm
        )
        valid = distance_mm <= params.distance_max_mm

        if not (visible and valid):
            logger.debug(
                f"Distance sensor: rejected {distance_mm}mm size={size} "
                f"(visible={visible}, valid={valid})"
            )
            return None
        return distance_mm / MM_PER_INCH

    def sensor_pose(self, bot: Position) -> Position:
        """Field-frame pose of the sensor when the robot is at bot."""
        return bot.transform(self.offset)

    def predict(self, bot: Position) -> float | None:
        """
        Expected reading from a hypothesized robot pose.

        Args:
            bot: Candidate robot pose in the field frame.

        Returns:
            Distance in inches to the closest wall along the sensor's
            heading, or None if the ray leaves the field without a hit.
        """
        ray = Line.ray(self.sensor_pose(bot), self.ray_length)
        return self.field.raycast(ray)

    def predict_many(self, poses: Iterable[Position]) -> list[float | None]:
        """predict() for each candidate pose, in order."""
        return [self.predict(pose) for pose in poses]
