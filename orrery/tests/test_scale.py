"""Tests for the scale mapper."""
import unittest

import numpy as np

from orrery import (
    ScaleMode,
    scene_distance,
    scene_distance_mkm,
    exaggerated_radius,
    realistic_radius,
    body_radius,
)


class TestSceneDistance(unittest.TestCase):

    def test_realistic_is_identity(self):
        for au in [0.0, 0.387, 1.0, 30.07, 186.0]:
            self.assertEqual(scene_distance(au, ScaleMode.REALISTIC), au)

    def test_exaggerated_formula(self):
        self.assertAlmostEqual(scene_distance(0.0, ScaleMode.EXAGGERATED), 2.0)
        self.assertAlmostEqual(scene_distance(1.0, ScaleMode.EXAGGERATED), 6.0)
        self.assertAlmostEqual(scene_distance(30.07, ScaleMode.EXAGGERATED), 2.0 + 30.07**0.55 * 4.0)

    def test_default_mode_is_exaggerated(self):
        self.assertAlmostEqual(scene_distance(1.0), 6.0)

    def test_accepts_mode_strings(self):
        self.assertEqual(scene_distance(5.0, "realistic"), 5.0)
        self.assertAlmostEqual(scene_distance(1.0, "exaggerated"), 6.0)

    def test_rejects_unknown_mode(self):
        with self.assertRaises(ValueError):
            scene_distance(1.0, "logarithmic")

    def test_strictly_increasing(self):
        au = np.concatenate([[0.0], np.geomspace(1e-6, 1e3, 500)])
        for mode in ScaleMode:
            mapped = np.asarray(scene_distance(au, mode), dtype=float)
            self.assertTrue(np.all(np.diff(mapped) > 0.0), f"not increasing in {mode.value} mode")

    def test_exaggerated_compresses_outer_system(self):
        inner_gap = scene_distance(1.0) - scene_distance(0.387)
        outer_gap = scene_distance(30.07) - scene_distance(19.19)
        self.assertGreater(inner_gap / (1.0 - 0.387), outer_gap / (30.07 - 19.19))

    def test_million_km_input(self):
        self.assertAlmostEqual(scene_distance_mkm(149.6, ScaleMode.REALISTIC), 1.0)
        self.assertAlmostEqual(scene_distance_mkm(149.6, ScaleMode.EXAGGERATED), 6.0)


class TestBodyRadius(unittest.TestCase):

    def test_exaggerated_radius_of_earth(self):
        self.assertAlmostEqual(exaggerated_radius(6371.0), 0.06 + np.log(2.0) * 0.08)

    def test_realistic_radius(self):
        self.assertAlmostEqual(realistic_radius(149597870.7), 100.0)

    def test_radii_positive(self):
        for radius in [1e-3, 2.4, 2439.7, 69911.0, 696000.0]:
            for mode in ScaleMode:
                self.assertGreater(body_radius(radius, mode), 0.0)

    def test_body_radius_dispatch(self):
        self.assertEqual(body_radius(3389.5, ScaleMode.REALISTIC), realistic_radius(3389.5))
        self.assertEqual(body_radius(3389.5, ScaleMode.EXAGGERATED), exaggerated_radius(3389.5))


if __name__ == '__main__':
    unittest.main()
