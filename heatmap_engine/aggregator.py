import logging
from collections import OrderedDict
from datetime import datetime

import pytz

from heatmap_engine import constants
from heatmap_engine.models import (
    EMPTY_SUMMARY,
    FloorDwell,
    FloorPoint,
    FloorRecord,
    PathEntry,
    PathStep,
    Summary,
    WorkflowEntry,
)

logger = logging.getLogger(__name__)


class SessionAggregator:
    """
    Turns the stream of recorded points into dwell times, the visit path and summaries.

    There's no "finished" state: every get_* method is a read-only projection of what
    has been recorded so far, so the same calls serve the live display and the final
    report.  The time between two points is credited to the floor we were on at the
    first of them, which keeps the per-floor totals and the path adding up to exactly
    the session length.
    """

    def __init__(self, floor_namer, timezone=constants.DEFAULT_TIMEZONE):
        self.floor_namer = floor_namer
        self.timezone = pytz.timezone(timezone)
        self.reset()

    def reset(self):
        self.started_at = None
        self.last_timestamp = None
        self.current_floor = None
        self.points = []
        self.floor_points = {}
        self.floor_records = {}
        self.path = []

    def add_point(self, point):
        if self.started_at is None:
            self.started_at = point.timestamp
            self._open_step(point.floor, point.timestamp)
        else:
            elapsed = (point.timestamp - self.last_timestamp) / 1000.0
            self.floor_records[self.current_floor].total_duration += elapsed
            self.path[-1].duration += elapsed
            if point.floor != self.current_floor:
                logger.debug(
                    "Left {0} after {1:.1f} s".format(
                        self.path[-1].floor_name, self.path[-1].duration
                    )
                )
                self._open_step(point.floor, point.timestamp)

        self.floor_records[point.floor].last_seen_at = point.timestamp
        self.current_floor = point.floor
        self.last_timestamp = point.timestamp
        self.points.append(point)
        self.floor_points.setdefault(point.floor, []).append(
            FloorPoint(point.normalized_x, point.normalized_y, point.intensity)
        )

    def _open_step(self, floor, timestamp):
        record = self.floor_records.get(floor)
        if record is None:
            record = FloorRecord(floor, self.floor_namer(floor), timestamp)
            self.floor_records[floor] = record
        record.visits += 1
        self.path.append(PathStep(floor, record.floor_name, timestamp))

    def get_vertical_heatmap(self):
        return OrderedDict(
            (
                floor,
                FloorDwell(
                    record.floor_name,
                    record.total_duration,
                    record.visits,
                    record.last_seen_at,
                ),
            )
            for floor, record in sorted(self.floor_records.items())
        )

    def get_floor_heatmap(self, floor):
        return list(self.floor_points.get(floor, ()))

    def get_workflow_analysis(self):
        """Every visited floor, the ones where the most time was spent first."""
        records = sorted(
            self.floor_records.values(),
            key=lambda r: (-r.total_duration, r.floor_index),
        )
        return [
            WorkflowEntry(r.floor_index, r.floor_name, r.total_duration)
            for r in records
        ]

    def get_summary(self, dropped_samples=0):
        if self.started_at is None:
            return EMPTY_SUMMARY._replace(dropped_samples=dropped_samples)
        return Summary(
            duration=(self.last_timestamp - self.started_at) / 1000.0,
            floors_visited=sum(
                1 for r in self.floor_records.values() if r.total_duration > 0
            ),
            total_points=len(self.points),
            start_floor=self.path[0].floor_index,
            end_floor=self.current_floor,
            path_steps=len(self.path),
            dropped_samples=dropped_samples,
        )

    def get_path(self):
        # The open step's duration is already current as of the last point.
        return [
            PathEntry(
                order,
                step.floor_index,
                step.floor_name,
                self._format_time(step.entered_at),
                step.duration,
            )
            for order, step in enumerate(self.path, start=1)
        ]

    def _format_time(self, timestamp):
        when = datetime.fromtimestamp(timestamp / 1000.0, self.timezone)
        return when.strftime(constants.PATH_TIME_FORMAT)
