"""Tests for eclipse scanning, the capped event log and the throttled monitor."""
import unittest

from orrery import Body, OrbitalElements, EclipseEvent, EclipseLog, EclipseMonitor, SimulationConfig, scan_alignments
from orrery.bodies import planets


def _fixed_body(name, a):
    # A non-positive period pins the body at (a, 0, 0)
    return Body(name=name, kind="planet", radius=1000.0,
                elements=OrbitalElements(a=a, e=0.0, inclination=0.0, mean_anomaly=0.0, period=0.0))


class TestScanAlignments(unittest.TestCase):

    def setUp(self):
        self.inner = _fixed_body("Inner", 1.0)
        self.outer = _fixed_body("Outer", 2.0)
        self.quadrature = Body(
            name="Quadrature", kind="planet", radius=1000.0,
            elements=OrbitalElements(a=3.0, e=0.0, inclination=0.0, mean_anomaly=90.0, period=365.0),
        )

    def test_aligned_pair_is_reported(self):
        events = scan_alignments([self.inner, self.outer, self.quadrature], 0.0)
        self.assertEqual(len(events), 1)
        event = events[0]
        self.assertEqual((event.inner_body, event.outer_body), ("Inner", "Outer"))
        self.assertAlmostEqual(event.alignment, 1.0, places=9)
        self.assertEqual(event.time, 0.0)

    def test_pair_order_follows_current_distance(self):
        events = scan_alignments([self.outer, self.inner], 0.0)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].inner_body, "Inner")

    def test_cutoff_filters_events(self):
        self.assertEqual(scan_alignments([self.inner, self.outer], 0.0, cutoff=1.0), [])

    def test_fewer_than_two_bodies(self):
        self.assertEqual(scan_alignments([self.inner], 0.0), [])
        self.assertEqual(scan_alignments([], 0.0), [])

    def test_catalogue_scan_scores_in_range(self):
        for t in [0.0, 7672.5, -5000.0]:
            for event in scan_alignments(planets(), t, threshold=0.2, cutoff=0.0):
                self.assertGreater(event.alignment, 0.0)
                self.assertLessEqual(event.alignment, 1.0)
                self.assertNotEqual(event.inner_body, event.outer_body)


class TestEclipseLog(unittest.TestCase):

    def test_keeps_most_recent_events(self):
        log = EclipseLog(max_events=3)
        for k in range(5):
            log.add(EclipseEvent(time=float(k), inner_body="Venus", outer_body="Earth", alignment=0.5))
        self.assertEqual(len(log), 3)
        self.assertEqual([e.time for e in log.events], [2.0, 3.0, 4.0])

    def test_default_capacity(self):
        log = EclipseLog()
        log.extend(EclipseEvent(time=float(k), inner_body="A", outer_body="B", alignment=0.4) for k in range(25))
        self.assertEqual(len(log), 20)
        log.clear()
        self.assertEqual(log.events, [])


class TestEclipseMonitor(unittest.TestCase):

    def setUp(self):
        self.bodies = [_fixed_body("Inner", 1.0), _fixed_body("Outer", 2.0)]

    def test_throttles_scans(self):
        monitor = EclipseMonitor(self.bodies, interval_days=10.0)
        self.assertEqual(len(monitor.update(0.0)), 1)
        self.assertEqual(monitor.update(5.0), [])
        self.assertEqual(monitor.update(9.99), [])
        self.assertEqual(len(monitor.update(10.0)), 1)
        # Running the clock backwards also counts as elapsed time
        self.assertEqual(len(monitor.update(-1.0)), 1)
        self.assertEqual(len(monitor.log), 3)

    def test_from_config(self):
        config = SimulationConfig(eclipse_interval_days=1.0, eclipse_history=2, eclipse_cutoff=0.5)
        monitor = EclipseMonitor.from_config(self.bodies, config)
        for t in range(5):
            monitor.update(float(t))
        self.assertEqual(len(monitor.log), 2)
        self.assertEqual(monitor.cutoff, 0.5)


if __name__ == '__main__':
    unittest.main()
