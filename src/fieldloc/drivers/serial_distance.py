"""
Serial distance sensor driver.

The distance sensor is wired to a microcontroller that streams readings
over USB serial. A background thread keeps the latest reading for one
sensor port so reads from the control loop never block.

Protocol (MCU -> Pi):
    D:<port>,<distance_mm>,<object_size>\\n   - reading
    E:<port>,<error_code>\\n                  - sensor fault
"""

from __future__ import annotations

import logging
import threading
import time

import serial

from fieldloc.config import DISTANCE_BAUDRATE, DISTANCE_SERIAL_PORT, SENSOR_ERROR
from .distance import DistanceDriver

logger = logging.getLogger(__name__)


class SerialDistanceDriver(DistanceDriver):
    """
    Distance sensor on a serial-connected microcontroller.

    Usage:
        driver = SerialDistanceDriver(sensor_port=3)
        driver.start()

        distance = driver.distance()  # mm or None

        driver.stop()
    """

    def __init__(self, sensor_port: int, port: str = DISTANCE_SERIAL_PORT, baudrate: int = DISTANCE_BAUDRATE, max_age: float = 0.5):
        self.sensor_port = sensor_port
        self.port = port
        self.baudrate = baudrate
        self.max_age = max_age  # seconds before a reading counts as stale

        self._serial: serial.Serial | None = None
        self._connected = False
        self._running = False
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

        # Latest reading for sensor_port
        self._distance = SENSOR_ERROR
        self._object_size = SENSOR_ERROR
        self._timestamp = 0.0

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def is_running(self) -> bool:
        return self._running

    def connect(self) -> bool:
        """Open serial connection to the microcontroller."""
        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                timeout=0.005
            )
            self._connected = True
            logger.info(f"Distance sensor {self.sensor_port} connected on {self.port}")
            return True
        except (serial.SerialException, OSError) as e:
            logger.error(f"Failed to connect distance sensor on {self.port}: {e}")
            self._connected = False
            return False

    def disconnect(self):
        """Close serial connection."""
        if self._serial:
            self._serial.close()
            self._serial = None
        self._connected = False
        logger.info(f"Distance sensor {self.sensor_port} disconnected")

    def start(self) -> bool:
        """Start reading in a background thread."""
        if self._running:
            logger.warning("Distance sensor reader already running")
            return True
        if not self._connected and not self.connect():
            return False

        self._running = True
        self._thread = threading.Thread(target=self._read_loop, daemon=True)
        self._thread.start()
        logger.info(f"Distance sensor {self.sensor_port} reader started")
        return True

    def stop(self):
        """Stop the reader thread and close the port."""
        self._running = False

        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None

        self.disconnect()

    def update(self) -> bool:
        """
        Read one line from the serial port (non-blocking).

        Returns:
            True if a line for this sensor port was handled
        """
        if not self._serial or not self._serial.in_waiting:
            return False

        try:
            line = self._serial.readline().decode(errors="ignore").strip()
        except (serial.SerialException, OSError) as e:
            logger.error(f"Error reading distance sensor: {e}")
            try:
                self._serial.reset_input_buffer()
            except (serial.SerialException, OSError):
                logger.debug("Could not flush serial input buffer")
            return False

        return self.handle_line(line)

    def handle_line(self, line: str) -> bool:
        """
        Parse one protocol line and store it if it is for this port.

        Returns:
            True if the line updated this sensor's reading
        """
        if line.startswith("D:"):
            parts = line[2:].split(",")
            if len(parts) < 3:
                logger.warning(f"Malformed distance line: {line!r}")
                return False
            try:
                port, distance, size = (int(p) for p in parts[:3])
            except ValueError:
                logger.warning(f"Malformed distance line: {line!r}")
                return False
            if port != self.sensor_port:
                return False
            self._store(distance, size)
            return True

        if line.startswith("E:"):
            port_str, _, code = line[2:].partition(",")
            try:
                port = int(port_str)
            except ValueError:
                logger.warning(f"Malformed error line: {line!r}")
                return False
            if port != self.sensor_port:
                return False
            logger.error(f"Distance sensor {port} error: {code}")
            self._store(SENSOR_ERROR, SENSOR_ERROR)
            return True

        return False

    def get_timestamp(self) -> float:
        """Monotonic time of the latest reading."""
        with self._lock:
            return self._timestamp

    def raw_distance(self) -> int:
        with self._lock:
            if self._is_stale():
                return SENSOR_ERROR
            return self._distance

    def raw_object_size(self) -> int:
        with self._lock:
            if self._is_stale():
                return SENSOR_ERROR
            return self._object_size

    def _is_stale(self) -> bool:
        return time.monotonic() - self._timestamp > self.max_age

    def _store(self, distance: int, object_size: int):
        with self._lock:
            self._distance = distance
            self._object_size = object_size
            self._timestamp = time.monotonic()

    def _read_loop(self):
        """Background reader thread."""
        try:
            while self._running:
                if not self.update():
                    time.sleep(0.002)
        except (serial.SerialException, OSError) as e:
            # Port is gone; close it so start() reconnects
            logger.error(f"Distance sensor {self.sensor_port} reader stopped: {e}")
            self.disconnect()
        finally:
            self._running = False

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
