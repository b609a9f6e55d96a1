import csv
import logging
from time import sleep

from heatmap_engine import constants
from heatmap_engine.models import Sample

logger = logging.getLogger(__name__)


def read_trace(path):
    """
    Read a recorded accelerometer trace, a CSV file with timestamp,x,y,z columns.
    Rows we can't parse are logged and skipped so one bad line doesn't lose a session.
    :return: generator of Sample
    """
    with open(path, newline="") as trace_file:
        reader = csv.DictReader(trace_file)
        missing = set(constants.TRACE_COLUMNS) - set(reader.fieldnames or [])
        if missing:
            raise ValueError(
                "Trace {0} is missing columns {1}".format(path, sorted(missing))
            )
        for row in reader:
            try:
                yield Sample(
                    timestamp=int(row["timestamp"]),
                    x=float(row["x"]),
                    y=float(row["y"]),
                    z=float(row["z"]),
                )
            except (TypeError, ValueError):
                logger.debug(
                    "Skipping bad trace row {0}: {1}".format(reader.line_num, row)
                )


def write_trace(path, samples):
    with open(path, "w", newline="") as trace_file:
        writer = csv.writer(trace_file)
        writer.writerow(constants.TRACE_COLUMNS)
        for sample in samples:
            writer.writerow([sample.timestamp, sample.x, sample.y, sample.z])


def replay(engine, samples):
    """
    Feed samples into the engine in order.
    :return: how many of them were recorded
    """
    recorded = 0
    for sample in samples:
        if engine.add_point(sample.x, sample.y, sample.z, sample.timestamp) is not None:
            recorded += 1
    return recorded


class LiveSampleSource:
    """
    Polls a sensor read function every sample interval and stamps each reading with a
    clock that never repeats.  The interval is only nominal: a slow read just makes the
    next sample late, the engine integrates with whatever spacing actually happened.
    """

    def __init__(self, read_accelerometer, clock, sample_interval):
        """
        :param read_accelerometer: callable returning an (x, y, z) tuple in g
        :param clock: anything with now_ms(), normally a MillisecondClock
        :param sample_interval: milliseconds between reads
        """
        self.read_accelerometer = read_accelerometer
        self.clock = clock
        self.sample_interval = sample_interval

    def samples(self, count=None):
        taken = 0
        while count is None or taken < count:
            x, y, z = self.read_accelerometer()
            yield Sample(self.clock.now_ms(), x, y, z)
            taken += 1
            sleep(self.sample_interval / 1000.0)
