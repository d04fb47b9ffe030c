"""
Distance sensor driver interface.

Drivers report raw integers exactly as the hardware does: millimeters
for distance, 0-400 for object size, and SENSOR_ERROR when there is no
data. distance() / object_size() turn the sentinel into None so the
sensor model never handles magic numbers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fieldloc.config import SENSOR_ERROR


class DistanceDriver(ABC):
    """Base class for distance sensor drivers."""

    @abstractmethod
    def raw_distance(self) -> int:
        """
        Latest distance reading.

        Returns:
            Distance in mm, or SENSOR_ERROR.
        """
        ...

    @abstractmethod
    def raw_object_size(self) -> int:
        """
        Latest object size estimate.

        Returns:
            Size on the native 0-400 scale, or SENSOR_ERROR when the
            sensor cannot size the target.
        """
        ...

    def distance(self) -> int | None:
        """Distance in mm, or None if the sensor reported an error."""
        value = self.raw_distance()
        if value == SENSOR_ERROR:
            return None
        return value

    def object_size(self) -> int | None:
        """Object size, or None if the sensor reported its sentinel."""
        value = self.raw_object_size()
        if value == SENSOR_ERROR:
            return None
        return value


class SimulatedDistanceDriver(DistanceDriver):
    """
    In-memory driver returning whatever reading was last set.

    Usage:
        driver = SimulatedDistanceDriver()
        driver.set_reading(50, 5)
        model = DistanceSensorModel(driver, offset, field)
    """

    def __init__(self, distance_mm: int = SENSOR_ERROR, object_size: int = SENSOR_ERROR):
        self._distance = distance_mm
        self._object_size = object_size
        self.read_count = 0

    def set_reading(self, distance_mm: int, object_size: int = SENSOR_ERROR):
        self._distance = int(distance_mm)
        self._object_size = int(object_size)

    def set_error(self):
        """Make the next reads report no data."""
        self._distance = SENSOR_ERROR
        self._object_size = SENSOR_ERROR

    def raw_distance(self) -> int:
        self.read_count += 1
        return self._distance

    def raw_object_size(self) -> int:
        return self._object_size
