"""
Sensor drivers for the distance sensor.
"""

from .distance import DistanceDriver, SimulatedDistanceDriver
from .serial_distance import SerialDistanceDriver

__all__ = ["DistanceDriver", "SimulatedDistanceDriver", "SerialDistanceDriver"]
