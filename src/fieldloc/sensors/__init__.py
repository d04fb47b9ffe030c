"""
Sensor Layer - Sensor models used for localization.

- DistanceSensorModel: filtered distance reading + raycast prediction
"""

from .distance import DistanceSensorModel

__all__ = ["DistanceSensorModel"]
