from __future__ import annotations

import json
import logging

from fieldloc.config import DISTANCE_CLOSE_MM, DISTANCE_MAX_MM, DISTANCE_VISIBLE_SIZE
from fieldloc.params import Parameters


def test_defaults_match_config() -> None:
    params = Parameters()
    assert params.distance_visible_size == DISTANCE_VISIBLE_SIZE == 80
    assert params.distance_close_mm == DISTANCE_CLOSE_MM == 100
    assert params.distance_max_mm == DISTANCE_MAX_MM == 2000


def test_update_coerces_types_and_skips_bad_values(caplog) -> None:
    params = Parameters()
    with caplog.at_level(logging.WARNING, logger="fieldloc.params"):
        params.update(distance_max_mm="1800", distance_close_mm="near", bogus=1)

    assert params.distance_max_mm == 1800
    assert params.distance_close_mm == 100
    messages = [r.getMessage() for r in caplog.records]
    assert "Invalid value for distance_close_mm: near" in messages
    assert "Unknown parameter: bogus" in messages


def test_save_and_load_round_trip(tmp_path) -> None:
    path = tmp_path / "params.json"
    params = Parameters(distance_visible_size=64, ray_length_factor=3.0)
    params.save(path)

    assert json.loads(path.read_text())["distance_visible_size"] == 64
    loaded = Parameters.load(path)
    assert loaded == params


def test_load_missing_or_corrupt_file_gives_defaults(tmp_path) -> None:
    assert Parameters.load(tmp_path / "missing.json") == Parameters()

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json")
    assert Parameters.load(corrupt) == Parameters()


def test_to_dict() -> None:
    assert Parameters().to_dict() == {
        "distance_visible_size": 80,
        "distance_close_mm": 100,
        "distance_max_mm": 2000,
        "ray_length_factor": 2.0,
    }
