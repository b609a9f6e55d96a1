from collections import namedtuple

# One accelerometer reading, in g-units, stamped in milliseconds.
Sample = namedtuple("Sample", ["timestamp", "x", "y", "z"])

# A recorded observation.  Normalized coordinates and intensity are all within [0, 1].
Point = namedtuple(
    "Point", ["floor", "timestamp", "normalized_x", "normalized_y", "intensity"]
)

# Query results.  These are built fresh for every query and never alias session state.
FloorPoint = namedtuple("FloorPoint", ["normalized_x", "normalized_y", "intensity"])

FloorDwell = namedtuple("FloorDwell", ["floor_name", "duration", "visits", "last_seen_at"])

WorkflowEntry = namedtuple("WorkflowEntry", ["floor", "floor_name", "duration"])

Summary = namedtuple(
    "Summary",
    [
        "duration",
        "floors_visited",
        "total_points",
        "start_floor",
        "end_floor",
        "path_steps",
        "dropped_samples",
    ],
)

PathEntry = namedtuple("PathEntry", ["order", "floor", "floor_name", "time", "duration"])

EMPTY_SUMMARY = Summary(
    duration=0.0,
    floors_visited=0,
    total_points=0,
    start_floor=None,
    end_floor=None,
    path_steps=0,
    dropped_samples=0,
)


class FloorRecord:
    """Dwell bookkeeping for one floor, only ever changed by the aggregator."""

    __slots__ = ("floor_index", "floor_name", "total_duration", "last_seen_at", "visits")

    def __init__(self, floor_index, floor_name, first_seen_at):
        self.floor_index = floor_index
        self.floor_name = floor_name
        self.total_duration = 0.0  # Units of seconds
        self.last_seen_at = first_seen_at  # Units of milliseconds
        self.visits = 0


class PathStep:
    """One contiguous stretch of time on a single floor."""

    __slots__ = ("floor_index", "floor_name", "entered_at", "duration")

    def __init__(self, floor_index, floor_name, entered_at):
        self.floor_index = floor_index
        self.floor_name = floor_name
        self.entered_at = entered_at  # Units of milliseconds
        self.duration = 0.0  # Units of seconds
