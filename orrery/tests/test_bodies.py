"""Tests for the body catalog and body positions."""
import unittest
from collections import Counter
from datetime import date

import numpy as np
from numpy.testing import assert_allclose
from pydantic import TypeAdapter, ValidationError

from orrery import (
    DAY,
    Asteroid,
    CelestialBody,
    Moon,
    OrbitElements,
    Planet,
    ReferenceEpoch,
    UnknownBody,
    bodies_data,
    body_position,
    get_body,
)


class TestCatalog(unittest.TestCase):

    def test_counts(self):
        kinds = Counter(body.kind for body in bodies_data.values())
        self.assertEqual(kinds['planet'], 8)
        self.assertEqual(kinds['asteroid'], 3)
        self.assertEqual(kinds['moon'], 23)

    def test_types(self):
        self.assertIsInstance(bodies_data['Earth'], Planet)
        self.assertIsInstance(bodies_data['Ceres'], Asteroid)
        self.assertIsInstance(bodies_data['Europa'], Moon)
        self.assertEqual(bodies_data['Europa'].parent, 'Jupiter')

    def test_every_moon_has_a_parent(self):
        for body in bodies_data.values():
            if isinstance(body, Moon):
                self.assertIsInstance(get_body(body.parent), Planet, body.name)

    def test_get_body_case_insensitive(self):
        self.assertIs(get_body('mars'), bodies_data['Mars'])
        self.assertIs(get_body('EUROPA'), bodies_data['Europa'])

    def test_unknown_body(self):
        with self.assertRaises(UnknownBody):
            get_body('Vulcan')
        # lookups may also be guarded as plain KeyErrors
        with self.assertRaises(KeyError):
            get_body('Vulcan')

    def test_get_period(self):
        earth = bodies_data['Earth']
        self.assertAlmostEqual(earth.get_period('day'), 365.25)
        self.assertAlmostEqual(earth.get_period('years'), 1.0)
        self.assertAlmostEqual(earth.get_period('s'), 365.25 * DAY)
        self.assertAlmostEqual(bodies_data['Ceres'].get_period('year'), 4.60)
        with self.assertRaises(ValueError):
            earth.get_period('weeks')

    def test_radius(self):
        self.assertEqual(bodies_data['Earth'].radius, 6371.0)


class TestBodyValidation(unittest.TestCase):

    def test_invalid_elements(self):
        with self.assertRaises(ValidationError):
            Planet(name='Nowhere', diameter=1000.0, elements=OrbitElements(a=1.0, period=-1.0, e=0.1, i=0.0))
        with self.assertRaises(ValidationError):
            Planet(name='Nowhere', diameter=1000.0, elements=OrbitElements(a=1.0, period=1.0e7, e=1.5, i=0.0))

    def test_non_positive_diameter(self):
        with self.assertRaises(ValidationError):
            Planet(name='Nowhere', diameter=0.0, elements=OrbitElements(a=1.0, period=1.0e7, e=0.1, i=0.0))

    def test_discriminated_union(self):
        adapter = TypeAdapter(CelestialBody)
        body = adapter.validate_python({
            'kind': 'moon',
            'name': 'Testmoon',
            'parent': 'Earth',
            'diameter': 10.0,
            'elements': OrbitElements(a=1.0e-4, period=1.0e5, e=0.0, i=0.0),
        })
        self.assertIsInstance(body, Moon)

    def test_frozen(self):
        with self.assertRaises(ValidationError):
            bodies_data['Earth'].name = 'Terra'


class TestBodyPosition(unittest.TestCase):

    def setUp(self):
        self.epoch = ReferenceEpoch(today=lambda: date(2025, 1, 1))

    def test_moon_orbits_parent(self):
        moon = bodies_data['Moon']
        a, e = moon.elements.a, moon.elements.e
        for t in np.linspace(0.0, moon.orbital_period, 9):
            r_moon = np.asarray(body_position(moon, t, 1.0, epoch=self.epoch))
            r_earth = np.asarray(body_position(bodies_data['Earth'], t, 1.0, epoch=self.epoch))
            separation = np.linalg.norm(r_moon - r_earth)
            self.assertGreaterEqual(separation, a * (1.0 - e) * (1.0 - 1e-9))
            self.assertLessEqual(separation, a * (1.0 + e) * (1.0 + 1e-9))

    def test_get_position_matches_body_position(self):
        mars = bodies_data['Mars']
        assert_allclose(np.asarray(mars.get_position(1.0e6, 50.0, epoch=self.epoch)),
                        np.asarray(body_position(mars, 1.0e6, 50.0, epoch=self.epoch)))

    def test_moon_phase_starts_at_periapsis(self):
        # A moon has zero phase, so at t=0 it sits on its local +x axis
        io = bodies_data['Io']
        r = np.asarray(body_position(io, 0.0, 1.0, epoch=self.epoch))
        r_parent = np.asarray(body_position(bodies_data['Jupiter'], 0.0, 1.0, epoch=self.epoch))
        offset = r - r_parent
        assert_allclose(offset, [io.elements.a * (1.0 - io.elements.e), 0.0, 0.0], atol=1e-15)


if __name__ == '__main__':
    unittest.main()
