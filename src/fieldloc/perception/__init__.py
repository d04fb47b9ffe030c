"""
Perception Layer - Field model.

- Field: boundary walls and raycasting
- FieldVisualizer: top-down debug rendering
"""

from .field import Field
from .visualizer import FieldVisualizer

__all__ = ["Field", "FieldVisualizer"]
