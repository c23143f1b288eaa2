"""Tests for the body catalogue."""
import datetime
import unittest

import numpy as np
import pytest
from pydantic import ValidationError

from orrery import Body, OrbitalElements, ScaleMode, bodies_data, get_body, load_bodies_data, scene_distance
from orrery.bodies import planets, comets


class TestCatalogue(unittest.TestCase):

    def test_counts(self):
        self.assertEqual(len(planets()), 8)
        self.assertEqual(len(comets()), 3)
        self.assertEqual(len(bodies_data), 11)

    def test_planets_in_distance_order(self):
        names = [p.name for p in planets()]
        self.assertEqual(names, ["Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune"])
        a = [p.elements.a for p in planets()]
        self.assertEqual(a, sorted(a))

    def test_earth_is_one_au(self):
        earth = get_body("Earth")
        self.assertAlmostEqual(earth.elements.a, 1.0, places=12)
        self.assertAlmostEqual(earth.distance_mkm, 149.6, places=9)

    def test_comet_details(self):
        halley = get_body("Halley's Comet")
        self.assertTrue(halley.is_comet())
        self.assertEqual(halley.last_perihelion, datetime.date(1986, 2, 9))
        # Perihelion recorded in the catalogue agrees with a(1 - e)
        self.assertAlmostEqual(halley.elements.a * (1 - halley.elements.e), halley.perihelion, delta=0.01)

    def test_lookup_is_case_insensitive(self):
        self.assertIs(get_body("mars"), get_body("Mars"))

    def test_unknown_body(self):
        with self.assertRaises(KeyError):
            get_body("Vulcan")

    def test_reload_matches_module_catalogue(self):
        reloaded = load_bodies_data()
        self.assertEqual(list(reloaded), list(bodies_data))


class TestBodyState(unittest.TestCase):

    def test_position_distance_within_apsides(self):
        for body in bodies_data.values():
            a, e = body.elements.a, body.elements.e
            for t in [-20000.0, 0.0, 8000.0]:
                r = body.distance_to_sun(t)
                self.assertGreaterEqual(r, a * (1 - e) * (1 - 1e-9))
                self.assertLessEqual(r, a * (1 + e) * (1 + 1e-9))

    def test_scene_position_keeps_direction(self):
        mars = get_body("Mars")
        r = mars.position(123.0)
        scene = mars.scene_position(123.0, ScaleMode.EXAGGERATED)
        np.testing.assert_allclose(scene / np.linalg.norm(scene), r / np.linalg.norm(r), atol=1e-12)
        self.assertAlmostEqual(np.linalg.norm(scene), scene_distance(np.linalg.norm(r)), places=10)

    def test_realistic_scene_position_is_au(self):
        jupiter = get_body("Jupiter")
        np.testing.assert_allclose(jupiter.scene_position(500.0, "realistic"), jupiter.position(500.0))

    def test_orbit_path_in_scene_units(self):
        saturn = get_body("Saturn")
        path = saturn.orbit_path(segments=32, mode=ScaleMode.REALISTIC)
        self.assertEqual(path.shape, (33, 3))
        r = np.linalg.norm(path, axis=1)
        self.assertAlmostEqual(r.min(), saturn.elements.a * (1 - saturn.elements.e), places=9)


def test_body_rejects_hyperbolic_elements():
    with pytest.raises(ValidationError):
        Body(name="Oumuamua", kind="comet", radius=0.1,
             elements=OrbitalElements(a=1.0, e=1.2, inclination=122.7, mean_anomaly=0.0, period=365.0))


def test_body_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        Body(name="Ceres", kind="dwarf", radius=470.0,
             elements=OrbitalElements(a=2.77, e=0.0785, inclination=10.6, mean_anomaly=0.0, period=1680.0))


def test_load_from_directory_without_comets(tmp_path):
    source = load_bodies_data()
    (tmp_path / "planets.csv").write_text(
        "Name,Distance from Sun (Mkm),Eccentricity (),Inclination (deg),"
        "Mean Anomaly at J2000 (deg),Orbital Period (days),Radius (km)\n"
        "Earth,149.6,0.0167,0.0,358.617,365.256,6371.0\n"
    )
    bodies = load_bodies_data(tmp_path)
    assert list(bodies) == ["Earth"]
    assert bodies["Earth"].elements == source["Earth"].elements
