import logging
import threading
from collections import Counter
from enum import Enum, unique

import numpy as np

from heatmap_engine import constants
from heatmap_engine.aggregator import SessionAggregator
from heatmap_engine.configuration import EngineConfiguration
from heatmap_engine.floor_names import FloorNamer
from heatmap_engine.horizontal_tracker import HorizontalTracker
from heatmap_engine.models import Point
from heatmap_engine.vertical_tracker import VerticalTracker

logger = logging.getLogger(__name__)


@unique
class SampleStatus(Enum):
    ACCEPTED = "accepted"
    INVALID_SAMPLE = "invalid sample"
    OUT_OF_ORDER = "out of order timestamp"


class _Session:
    """Everything that belongs to one recording, replaced as a whole on reset."""

    def __init__(self, configuration, floor_namer):
        self.vertical = VerticalTracker(configuration)
        self.horizontal = HorizontalTracker(configuration)
        self.aggregator = SessionAggregator(floor_namer, configuration.timezone)
        self.last_timestamp = None
        self.dropped = Counter()


class HeatmapEngine:
    """
    Turns accelerometer samples from inside the car into the vertical (time per floor)
    and horizontal (movement within the car, per floor) heat maps.

    add_point() is the only thing that changes a session and reset() starts a new one.
    Queries can be made at any time, during or after recording, and always hand back
    fresh values.  All access goes through one lock so a display thread can query
    while the sensor thread records.
    """

    def __init__(self, configuration=None, floor_namer=None):
        self.configuration = (configuration or EngineConfiguration()).validate()
        self.floor_namer = floor_namer or FloorNamer.from_configuration(
            self.configuration
        )
        self._lock = threading.RLock()
        self._session = self._new_session()

    def _new_session(self):
        return _Session(self.configuration, self.floor_namer)

    def add_point(self, x, y, z, timestamp):
        """
        Record one accelerometer sample.
        :param x: lateral acceleration in g
        :param y: lateral acceleration in g
        :param z: vertical acceleration in g
        :param timestamp: milliseconds, must be later than the previous sample
        :return: the recorded Point, or None if the sample was dropped
        """
        with self._lock:
            session = self._session
            status = self._check_sample(session, x, y, z, timestamp)
            if status != SampleStatus.ACCEPTED:
                session.dropped[status] += 1
                logger.debug(
                    "Dropped sample ({0}): x={1!r} y={2!r} z={3!r} timestamp={4!r}".format(
                        status.value, x, y, z, timestamp
                    )
                )
                return None

            session.last_timestamp = timestamp
            session.vertical.update(z, timestamp)
            normalized_x, normalized_y, intensity = session.horizontal.update(
                x, y, z, timestamp
            )
            point = Point(
                session.vertical.current_floor,
                timestamp,
                normalized_x,
                normalized_y,
                intensity,
            )
            session.aggregator.add_point(point)
            return point

    def _check_sample(self, session, x, y, z, timestamp):
        if not _is_number(timestamp):
            return SampleStatus.OUT_OF_ORDER
        # Plain comparisons so NaN, infinities and huge ints all fall out without
        # converting anything to float.
        if not constants.MIN_TIMESTAMP <= timestamp <= constants.MAX_TIMESTAMP:
            return SampleStatus.OUT_OF_ORDER
        if session.last_timestamp is not None and timestamp <= session.last_timestamp:
            return SampleStatus.OUT_OF_ORDER
        if not all(_is_number(value) for value in (x, y, z)):
            return SampleStatus.INVALID_SAMPLE
        try:
            values = np.array([x, y, z], dtype=float)
        except OverflowError:
            return SampleStatus.INVALID_SAMPLE
        if not np.all(np.isfinite(values)):
            return SampleStatus.INVALID_SAMPLE
        if np.any(np.abs(values) > self.configuration.max_abs_acceleration):
            return SampleStatus.INVALID_SAMPLE
        return SampleStatus.ACCEPTED

    def reset(self):
        new_session = self._new_session()
        with self._lock:
            self._session = new_session
        logger.debug("Heat map session reset")

    @property
    def current_floor(self):
        with self._lock:
            return self._session.vertical.current_floor

    def dropped_samples(self):
        with self._lock:
            return dict(self._session.dropped)

    def get_vertical_heatmap(self):
        with self._lock:
            return self._session.aggregator.get_vertical_heatmap()

    def get_floor_heatmap(self, floor):
        with self._lock:
            return self._session.aggregator.get_floor_heatmap(floor)

    def get_workflow_analysis(self):
        with self._lock:
            return self._session.aggregator.get_workflow_analysis()

    def get_summary(self):
        with self._lock:
            session = self._session
            return session.aggregator.get_summary(sum(session.dropped.values()))

    def get_path(self):
        with self._lock:
            return self._session.aggregator.get_path()

    def snapshot(self):
        """
        Everything the report needs in one consistent, JSON ready dictionary.
        Floor numbers become string keys since that's all JSON allows.
        """
        with self._lock:
            vertical = self.get_vertical_heatmap()
            return {
                "vertical": {
                    str(floor): dwell._asdict() for floor, dwell in vertical.items()
                },
                "horizontal": {
                    str(floor): [p._asdict() for p in self.get_floor_heatmap(floor)]
                    for floor in vertical
                },
                "analysis": [entry._asdict() for entry in self.get_workflow_analysis()],
                "summary": self.get_summary()._asdict(),
                "path": [step._asdict() for step in self.get_path()],
            }


def _is_number(value):
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
        value, bool
    )
