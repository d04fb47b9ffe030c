"""
Runtime tunable parameters with JSON persistence.

Sensor models share one Parameters instance and read it on every
call, so changes take effect on the next sensor read cycle.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from fieldloc.config import (
    DISTANCE_CLOSE_MM,
    DISTANCE_MAX_MM,
    DISTANCE_VISIBLE_SIZE,
    RAY_LENGTH_FACTOR,
)

logger = logging.getLogger(__name__)

PARAMS_FILE = Path(__file__).parent / "params.json"


@dataclass
class Parameters:
    """Runtime tunable parameters."""

    # Distance sensor filter
    distance_visible_size: int = DISTANCE_VISIBLE_SIZE  # 0-400 native scale
    distance_close_mm: int = DISTANCE_CLOSE_MM
    distance_max_mm: int = DISTANCE_MAX_MM

    # Prediction
    ray_length_factor: float = RAY_LENGTH_FACTOR  # x field diagonal

    def update(self, **kwargs):
        """Update parameters from dict (e.g., loaded from JSON)."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                expected_type = type(getattr(self, key))
                try:
                    setattr(self, key, expected_type(value))
                except (TypeError, ValueError):
                    logger.warning(f"Invalid value for {key}: {value}")
            else:
                logger.warning(f"Unknown parameter: {key}")

    def save(self, path: Path = PARAMS_FILE):
        """Persist to JSON file."""
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)
        logger.info(f"Parameters saved to {path}")

    @classmethod
    def load(cls, path: Path = PARAMS_FILE) -> Parameters:
        """Load from JSON file, or return defaults."""
        path = Path(path)
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                params = cls()
                params.update(**data)
                logger.info(f"Parameters loaded from {path}")
                return params
            except (OSError, json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Failed to load {path}: {e}, using defaults")
        return cls()

    def to_dict(self) -> dict:
        """Convert to plain dict."""
        return asdict(self)
