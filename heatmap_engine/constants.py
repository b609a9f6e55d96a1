import os

# Standard gravity, used to turn g-units from the accelerometer into m/s^2.
STANDARD_GRAVITY = 9.80665  # Units of m/s^2

# Vertical tracking (tunable parameters, validate against real sensor traces)
DEFAULT_FLOOR_HEIGHT = 3.0  # Units of meters
# A floor change must keep pointing the same way for this long before we believe it.
DEFAULT_HYSTERESIS_WINDOW = 500  # Units of milliseconds
# Accelerations smaller than this are treated as sensor noise and not integrated.
DEFAULT_VERTICAL_NOISE_FLOOR = 0.02  # Units of g
# The accelerometer reports gravity on the z-axis unless the source removes it.
DEFAULT_GRAVITY_OFFSET = 0.0  # Units of g

# Horizontal tracking
DEFAULT_CAR_WIDTH = 1.5  # Units of meters
DEFAULT_CAR_DEPTH = 1.5  # Units of meters
DEFAULT_HORIZONTAL_NOISE_FLOOR = 0.02  # Units of g
# Intensity of 1.0 is reached at this total acceleration.
DEFAULT_CALIBRATION_MAX = 2.0  # Units of g

# Leaky integration: accumulated state decays with these time constants to bound drift.
DEFAULT_VELOCITY_TIME_CONSTANT = 4.0  # Units of seconds
DEFAULT_POSITION_TIME_CONSTANT = 30.0  # Units of seconds

# Samples arrive roughly this often, but we always integrate with the real timestamp deltas.
DEFAULT_SAMPLE_INTERVAL = 300  # Units of milliseconds
# If we have a gap in the accelerometer data of this long or more, integration starts over.
DEFAULT_MAX_SAMPLE_GAP = 2000  # Units of milliseconds
# Phone accelerometers top out around here, anything bigger is a glitch.
DEFAULT_MAX_ABS_ACCELERATION = 16.0  # Units of g

DEFAULT_TIMEZONE = "UTC"
PATH_TIME_FORMAT = "%H:%M:%S"
# Path times have to be shown as a date in any timezone, so stay inside what datetime
# can hold: the epoch up to the start of year 9999 UTC.
MIN_TIMESTAMP = 0  # Units of milliseconds
MAX_TIMESTAMP = 253370764800000  # Units of milliseconds
DEFAULT_FLOOR_NAME_FORMAT = "Floor {0}"

# Configuration file
CONFIG_FILE_NAME = os.environ.get(
    "HEATMAP_CONFIG_FILE_NAME", "/etc/liftai/heatmap.json"
)
CONFIG_FLOOR_HEIGHT = "floorHeight"
CONFIG_CAR_WIDTH = "carWidth"
CONFIG_CAR_DEPTH = "carDepth"
CONFIG_HYSTERESIS_WINDOW = "hysteresisWindow"
CONFIG_CALIBRATION_MAX = "calibrationMax"
CONFIG_SAMPLE_INTERVAL = "sampleInterval"
CONFIG_MAX_SAMPLE_GAP = "maxSampleGap"
CONFIG_VELOCITY_TIME_CONSTANT = "velocityTimeConstant"
CONFIG_POSITION_TIME_CONSTANT = "positionTimeConstant"
CONFIG_VERTICAL_NOISE_FLOOR = "verticalNoiseFloor"
CONFIG_HORIZONTAL_NOISE_FLOOR = "horizontalNoiseFloor"
CONFIG_GRAVITY_OFFSET = "gravityOffset"
CONFIG_MAX_ABS_ACCELERATION = "maxAbsAcceleration"
CONFIG_MIN_FLOOR = "minFloor"
CONFIG_MAX_FLOOR = "maxFloor"
CONFIG_GROUND_FLOOR_NAME = "groundFloorName"
CONFIG_FLOOR_NAMES = "floorNames"
CONFIG_TIMEZONE = "timezone"

# Logging
LOG_FILES_FOLDER = os.environ.get("HEATMAP_LOG_FOLDER", "/home/pi/liftai_logs")
LOG_NAME = "heatmap_engine"

# Trace files used for replaying recorded sessions
TRACE_COLUMNS = ["timestamp", "x", "y", "z"]
