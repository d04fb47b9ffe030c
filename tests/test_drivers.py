from __future__ import annotations

import logging
import time

import pytest
import serial

from fieldloc.config import SENSOR_ERROR
from fieldloc.drivers import SerialDistanceDriver, SimulatedDistanceDriver
from fieldloc.drivers import serial_distance


class FakeSerial:
    """Stands in for serial.Serial, replaying queued lines."""

    def __init__(self, port=None, baudrate=None, timeout=None, lines=()):
        self.port = port
        self.baudrate = baudrate
        self.lines = [line.encode() for line in lines]
        self.closed = False
        self.unplugged = False

    @property
    def in_waiting(self) -> int:
        if self.unplugged:
            raise serial.SerialException("device unplugged")
        return len(self.lines)

    def readline(self) -> bytes:
        return self.lines.pop(0)

    def reset_input_buffer(self):
        self.lines.clear()

    def close(self):
        self.closed = True


@pytest.fixture
def fake_serial(monkeypatch):
    created: list[FakeSerial] = []

    def factory(**kwargs):
        port = FakeSerial(**kwargs)
        created.append(port)
        return port

    monkeypatch.setattr(serial_distance.serial, "Serial", factory)
    return created


# ── Sentinel conversion ─────────────────────────────────────────


def test_simulated_driver_converts_sentinel() -> None:
    driver = SimulatedDistanceDriver()
    assert driver.raw_distance() == SENSOR_ERROR
    assert driver.distance() is None
    assert driver.object_size() is None

    driver.set_reading(812, 120)
    assert driver.distance() == 812
    assert driver.object_size() == 120

    driver.set_reading(812)
    assert driver.object_size() is None


# ── Serial protocol ─────────────────────────────────────────────


def test_handle_line_stores_reading_for_own_port() -> None:
    driver = SerialDistanceDriver(sensor_port=3)
    assert driver.handle_line("D:3,640,150") is True
    assert driver.distance() == 640
    assert driver.object_size() == 150


def test_handle_line_ignores_other_ports_and_noise() -> None:
    driver = SerialDistanceDriver(sensor_port=3)
    assert driver.handle_line("D:4,640,150") is False
    assert driver.handle_line("S:100,20,90") is False
    assert driver.handle_line("") is False
    assert driver.distance() is None


@pytest.mark.parametrize("line", ["D:3,640", "D:3,abc,150", "E:x,7"])
def test_handle_line_rejects_malformed(line: str) -> None:
    driver = SerialDistanceDriver(sensor_port=3)
    assert driver.handle_line(line) is False


def test_error_line_clears_reading() -> None:
    driver = SerialDistanceDriver(sensor_port=3)
    driver.handle_line("D:3,640,150")
    assert driver.handle_line("E:3,ENODEV") is True
    assert driver.distance() is None
    assert driver.object_size() is None


def test_sentinel_passes_through_protocol() -> None:
    driver = SerialDistanceDriver(sensor_port=1)
    driver.handle_line(f"D:1,2500,{SENSOR_ERROR}")
    assert driver.distance() == 2500
    assert driver.object_size() is None


def test_stale_reading_reports_no_data() -> None:
    driver = SerialDistanceDriver(sensor_port=3, max_age=-1.0)
    driver.handle_line("D:3,640,150")
    assert driver.distance() is None


def test_update_reads_from_serial(fake_serial) -> None:
    driver = SerialDistanceDriver(sensor_port=2, port="/dev/null")
    assert driver.connect() is True
    assert driver.is_connected
    fake_serial[0].lines = [b"D:2,300,90\n", b"D:5,10,10\n"]

    assert driver.update() is True
    assert driver.update() is False
    assert driver.update() is False  # nothing waiting
    assert driver.distance() == 300

    driver.disconnect()
    assert fake_serial[0].closed
    assert not driver.is_connected


def test_connect_failure_returns_false(monkeypatch) -> None:
    def broken(**kwargs):
        raise serial.SerialException("no such port")

    monkeypatch.setattr(serial_distance.serial, "Serial", broken)
    driver = SerialDistanceDriver(sensor_port=2, port="/dev/missing")
    assert driver.connect() is False
    assert driver.start() is False
    assert not driver.is_running


def test_background_reader_publishes_latest(fake_serial) -> None:
    driver = SerialDistanceDriver(sensor_port=2, port="/dev/null")
    with driver:
        assert driver.is_running
        fake_serial[0].lines = [b"D:2,300,90\n", b"D:2,310,95\n"]

        deadline = time.monotonic() + 2.0
        while driver.distance() != 310 and time.monotonic() < deadline:
            time.sleep(0.01)

        assert driver.distance() == 310
        assert driver.object_size() == 95

    assert not driver.is_running
    assert fake_serial[0].closed


def test_reader_stops_cleanly_when_port_fails(fake_serial, caplog) -> None:
    driver = SerialDistanceDriver(sensor_port=2, port="/dev/null")
    assert driver.start() is True
    reader = driver._thread

    with caplog.at_level(logging.ERROR, logger="fieldloc.drivers.serial_distance"):
        fake_serial[0].unplugged = True
        reader.join(timeout=2.0)

    assert not reader.is_alive()
    assert not driver.is_running
    assert not driver.is_connected
    assert fake_serial[0].closed
    assert any("reader stopped" in r.getMessage() for r in caplog.records)

    # A fresh start reconnects instead of reporting "already running"
    assert driver.start() is True
    assert len(fake_serial) == 2
    assert driver.is_running
    driver.stop()
    assert not driver.is_running
