"""
Configuration constants for field localization.

All fixed hardware values and default tunables in one place.
Runtime-adjustable values are mirrored in params.Parameters.
"""

# =============================================================================
# HARDWARE PORTS
# =============================================================================

# Microcontroller streaming distance sensor readings
DISTANCE_SERIAL_PORT = "/dev/ttyACM0"
DISTANCE_BAUDRATE = 115200

# =============================================================================
# DISTANCE SENSOR
# =============================================================================

SENSOR_ERROR = 2**31 - 1  # Driver "no data" sentinel (INT32_MAX)
MM_PER_INCH = 25.4
OBJECT_SIZE_MAX = 400  # Native object size scale is 0-400

# Visibility / validity filter defaults (empirically tuned)
DISTANCE_VISIBLE_SIZE = 80  # object size above this = single solid target
DISTANCE_CLOSE_MM = 100  # closer than this is trusted regardless of size
DISTANCE_MAX_MM = 2000  # sensor unreliable past this

# =============================================================================
# FIELD GEOMETRY (inches)
# =============================================================================

FIELD_SIZE = 144.0  # 12ft x 12ft square

# Ray length = field diagonal * factor, must stay above 1.5
RAY_LENGTH_FACTOR = 2.0

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

SINC_EPSILON = 1e-4  # radians
ANGLE_ROUND_DIGITS = 9  # decimal places (degrees) kept when snapping angles
INTERSECT_EPSILON = 1e-9
