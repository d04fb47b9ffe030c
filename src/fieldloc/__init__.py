"""
fieldloc - Pose algebra and distance sensor model for field localization.
"""

from .geometry import Line, Point, Position, Rotation, deg, rad
from .params import Parameters
from .perception import Field, FieldVisualizer
from .drivers import DistanceDriver, SerialDistanceDriver, SimulatedDistanceDriver
from .sensors import DistanceSensorModel

__all__ = [
    "Rotation",
    "deg",
    "rad",
    "Point",
    "Position",
    "Line",
    "Parameters",
    "Field",
    "FieldVisualizer",
    "DistanceDriver",
    "SimulatedDistanceDriver",
    "SerialDistanceDriver",
    "DistanceSensorModel",
]
