import unittest

from heatmap_engine.aggregator import SessionAggregator
from heatmap_engine.floor_names import FloorNamer
from heatmap_engine.models import EMPTY_SUMMARY, FloorPoint, Point
from heatmap_engine.test_utilities import START_OF_SESSION


def point(floor, offset_ms, x=0.5, y=0.5, intensity=0.0):
    return Point(floor, START_OF_SESSION + offset_ms, x, y, intensity)


class TestSessionAggregator(unittest.TestCase):
    def setUp(self):
        self.aggregator = SessionAggregator(FloorNamer(ground_floor_name="Ground"))

    def add(self, *points):
        for p in points:
            self.aggregator.add_point(p)

    def test_empty_session_defaults(self):
        self.assertEqual(self.aggregator.get_vertical_heatmap(), {})
        self.assertEqual(self.aggregator.get_floor_heatmap(0), [])
        self.assertEqual(self.aggregator.get_workflow_analysis(), [])
        self.assertEqual(self.aggregator.get_path(), [])
        self.assertEqual(self.aggregator.get_summary(), EMPTY_SUMMARY)
        self.assertEqual(self.aggregator.get_summary().duration, 0.0)
        self.assertEqual(self.aggregator.get_summary().floors_visited, 0)
        self.assertEqual(self.aggregator.get_summary().total_points, 0)

    def test_first_point_opens_path_with_no_duration(self):
        self.add(point(0, 0))
        path = self.aggregator.get_path()
        self.assertEqual(len(path), 1)
        self.assertEqual(path[0].order, 1)
        self.assertEqual(path[0].floor_name, "Ground")
        self.assertEqual(path[0].duration, 0.0)
        self.assertEqual(path[0].time, "12:26:40")

        summary = self.aggregator.get_summary()
        self.assertEqual(summary.duration, 0.0)
        # One point, but no time spent anywhere yet.
        self.assertEqual(summary.floors_visited, 0)
        self.assertEqual(summary.total_points, 1)
        self.assertEqual(list(self.aggregator.get_vertical_heatmap()), [0])

    def test_dwell_and_path_across_floor_changes(self):
        self.add(
            point(0, 0),
            point(0, 1000),
            point(1, 2000),
            point(1, 2500),
            point(0, 4000),
            point(0, 4500),
        )
        vertical = self.aggregator.get_vertical_heatmap()
        self.assertEqual(list(vertical), [0, 1])
        # Time between two points belongs to the floor of the earlier one.
        self.assertAlmostEqual(vertical[0].duration, 2.5)
        self.assertAlmostEqual(vertical[1].duration, 2.0)
        self.assertEqual(vertical[0].visits, 2)
        self.assertEqual(vertical[1].visits, 1)
        self.assertEqual(vertical[0].last_seen_at, START_OF_SESSION + 4500)
        self.assertEqual(vertical[1].floor_name, "Floor 1")

        path = self.aggregator.get_path()
        self.assertEqual([p.order for p in path], [1, 2, 3])
        self.assertEqual([p.floor for p in path], [0, 1, 0])
        self.assertEqual([p.time for p in path], ["12:26:40", "12:26:42", "12:26:44"])
        self.assertEqual([round(p.duration, 6) for p in path], [2.0, 2.0, 0.5])

        summary = self.aggregator.get_summary()
        self.assertAlmostEqual(summary.duration, 4.5)
        self.assertEqual(summary.floors_visited, 2)
        self.assertEqual(summary.total_points, 6)
        self.assertEqual(summary.start_floor, 0)
        self.assertEqual(summary.end_floor, 0)
        self.assertEqual(summary.path_steps, 3)

    def test_durations_add_up_to_session_length(self):
        offsets = [0, 310, 590, 930, 1200, 1520, 1800, 2150, 2400, 2710]
        floors = [0, 0, 1, 1, 2, 2, 1, -1, -1, 0]
        self.add(*[point(f, o) for f, o in zip(floors, offsets)])
        total = (offsets[-1] - offsets[0]) / 1000.0
        dwell = sum(d.duration for d in self.aggregator.get_vertical_heatmap().values())
        path = self.aggregator.get_path()
        self.assertAlmostEqual(dwell, total)
        self.assertAlmostEqual(sum(p.duration for p in path), total)
        self.assertAlmostEqual(self.aggregator.get_summary().duration, total)
        for previous, step in zip(path, path[1:]):
            self.assertNotEqual(previous.floor, step.floor)
        self.assertEqual([p.order for p in path], list(range(1, len(path) + 1)))

    def test_vertical_heatmap_is_in_floor_order(self):
        self.add(point(3, 0), point(-2, 1000), point(0, 2000), point(1, 3000))
        self.assertEqual(list(self.aggregator.get_vertical_heatmap()), [-2, 0, 1, 3])

    def test_workflow_analysis_sorts_by_time_spent(self):
        self.add(
            point(0, 0),
            point(2, 1000),
            point(1, 4000),
            point(3, 6000),
            point(0, 8000),
        )
        analysis = self.aggregator.get_workflow_analysis()
        # Floor 2: 3 s, floors 1 and 3: 2 s each (tie goes to the lower floor), floor 0: 1 s.
        self.assertEqual([a.floor for a in analysis], [2, 1, 3, 0])
        self.assertEqual(
            [round(a.duration, 6) for a in analysis], [3.0, 2.0, 2.0, 1.0]
        )
        self.assertEqual(analysis[0].floor_name, "Floor 2")

    def test_floor_heatmap(self):
        self.add(
            point(0, 0, 0.1, 0.2, 0.3),
            point(1, 100, 0.4, 0.5, 0.6),
            point(0, 200, 0.7, 0.8, 0.9),
        )
        self.assertEqual(
            self.aggregator.get_floor_heatmap(0),
            [FloorPoint(0.1, 0.2, 0.3), FloorPoint(0.7, 0.8, 0.9)],
        )
        self.assertEqual(self.aggregator.get_floor_heatmap(1), [FloorPoint(0.4, 0.5, 0.6)])
        self.assertEqual(self.aggregator.get_floor_heatmap(7), [])

    def test_queries_are_idempotent_and_do_not_alias(self):
        self.add(point(0, 0), point(1, 1000), point(1, 1500))
        first = (
            self.aggregator.get_vertical_heatmap(),
            self.aggregator.get_workflow_analysis(),
            self.aggregator.get_summary(),
            self.aggregator.get_path(),
            self.aggregator.get_floor_heatmap(1),
        )
        first[0].clear()
        first[4].clear()
        second = (
            self.aggregator.get_vertical_heatmap(),
            self.aggregator.get_workflow_analysis(),
            self.aggregator.get_summary(),
            self.aggregator.get_path(),
            self.aggregator.get_floor_heatmap(1),
        )
        third = (
            self.aggregator.get_vertical_heatmap(),
            self.aggregator.get_workflow_analysis(),
            self.aggregator.get_summary(),
            self.aggregator.get_path(),
            self.aggregator.get_floor_heatmap(1),
        )
        self.assertEqual(second, third)
        self.assertEqual(len(second[0]), 2)
        self.assertEqual(len(second[4]), 2)

    def test_open_step_reports_duration_so_far(self):
        self.add(point(0, 0), point(1, 1000))
        self.assertEqual(self.aggregator.get_path()[-1].duration, 0.0)
        self.add(point(1, 1700))
        self.assertAlmostEqual(self.aggregator.get_path()[-1].duration, 0.7)
        self.assertAlmostEqual(self.aggregator.get_path()[0].duration, 1.0)
        # Leaving floor 1 freezes its step, only the last step keeps growing.
        self.add(point(0, 2500), point(0, 3000))
        durations = [step.duration for step in self.aggregator.get_path()]
        self.assertEqual([round(d, 6) for d in durations], [1.0, 1.5, 0.5])

    def test_path_time_uses_configured_timezone(self):
        aggregator = SessionAggregator(FloorNamer(), "America/New_York")
        aggregator.add_point(point(0, 0))
        self.assertEqual(aggregator.get_path()[0].time, "08:26:40")
        self.assertEqual(aggregator.get_path()[0].floor_name, "Floor 0")

    def test_reset(self):
        self.add(point(0, 0), point(1, 1000))
        self.aggregator.reset()
        self.assertEqual(self.aggregator.get_summary(), EMPTY_SUMMARY)
        self.assertEqual(self.aggregator.get_vertical_heatmap(), {})
        self.assertEqual(self.aggregator.get_path(), [])
        self.assertEqual(self.aggregator.get_floor_heatmap(1), [])


if __name__ == "__main__":
    unittest.main()
