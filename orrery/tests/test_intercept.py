import unittest
from datetime import date

import numpy as np
from numpy.testing import assert_allclose

from orrery import (
    AU_TO_KM,
    ReferenceEpoch,
    bodies_data,
    body_position,
    make_travel_time_fn,
    plan_intercept,
    propulsion_data,
    travel_time,
)


class TestPlanIntercept(unittest.TestCase):

    def setUp(self):
        self.epoch = ReferenceEpoch(today=lambda: date(2025, 1, 1))
        self.earth = bodies_data['Earth']
        self.mars = bodies_data['Mars']
        self.scale = 50.0

    def test_converges_fast_craft(self):
        antimatter = propulsion_data['antimatter']
        solution = plan_intercept(self.earth, self.mars, 0.0, self.scale,
                                  make_travel_time_fn(antimatter), epoch=self.epoch)

        self.assertTrue(solution.converged)
        self.assertLess(solution.relative_change, 1e-3)
        self.assertLessEqual(solution.rounds, 10)
        self.assertGreater(solution.distance, 0.0)
        self.assertEqual(solution.departure_time, 0.0)
        self.assertAlmostEqual(solution.travel_time, travel_time(solution.distance, antimatter))

        # Earth and Mars are between 0.3 and 2.8 AU apart
        self.assertGreater(solution.distance, 0.3 * AU_TO_KM)
        self.assertLess(solution.distance, 2.8 * AU_TO_KM)

        r_mars = np.linalg.norm(solution.destination_position) / self.scale
        self.assertGreaterEqual(r_mars, self.mars.elements.a * (1.0 - self.mars.elements.e) - 1e-9)
        self.assertLessEqual(r_mars, self.mars.elements.a * (1.0 + self.mars.elements.e) + 1e-9)

        assert_allclose(solution.origin_position,
                        np.asarray(body_position(self.earth, 0.0, self.scale, epoch=self.epoch)))

    def test_zero_travel_time(self):
        solution = plan_intercept(self.earth, self.mars, 1.0e6, self.scale, lambda d: 0.0, epoch=self.epoch)

        self.assertTrue(solution.converged)
        self.assertEqual(solution.rounds, 2)
        self.assertEqual(solution.relative_change, 0.0)
        self.assertEqual(solution.arrival_time, 1.0e6)

        r_e = np.asarray(body_position(self.earth, 1.0e6, self.scale, epoch=self.epoch))
        r_m = np.asarray(body_position(self.mars, 1.0e6, self.scale, epoch=self.epoch))
        expected = np.linalg.norm(r_m - r_e) / self.scale * AU_TO_KM - self.earth.radius - self.mars.radius
        self.assertAlmostEqual(solution.distance / expected, 1.0, places=12)

    def test_distance_is_scale_independent(self):
        fn = make_travel_time_fn(propulsion_data['warp-drive'])
        visual = plan_intercept(self.earth, self.mars, 0.0, 50.0, fn, epoch=self.epoch)
        realistic = plan_intercept(self.earth, self.mars, 0.0, 100.0, fn, epoch=self.epoch)
        self.assertAlmostEqual(visual.distance / realistic.distance, 1.0, places=9)

    def test_round_cap_warns(self):
        fn = make_travel_time_fn(propulsion_data['chemical-rocket'])
        with self.assertLogs('orrery.intercept', level='WARNING') as cm:
            solution = plan_intercept(self.earth, self.mars, 0.0, self.scale, fn,
                                      epoch=self.epoch, max_rounds=1)
        self.assertFalse(solution.converged)
        self.assertEqual(solution.rounds, 1)
        self.assertEqual(solution.relative_change, float('inf'))
        self.assertIn("did not converge", cm.output[0])

    def test_overlapping_bodies_not_clamped(self):
        # Same body: centers coincide so the surface distance is minus one diameter
        solution = plan_intercept(self.earth, self.earth, 0.0, self.scale, lambda d: 0.0, epoch=self.epoch)
        self.assertAlmostEqual(solution.distance, -self.earth.diameter)

    def test_moon_destination(self):
        moon = bodies_data['Moon']
        fn = make_travel_time_fn(propulsion_data['warp-drive'])
        solution = plan_intercept(self.earth, moon, 0.0, self.scale, fn, epoch=self.epoch)
        self.assertTrue(solution.converged)
        # Earth-Moon distance is under 410,000 km center to center
        self.assertLess(solution.distance, 4.1e5)
        self.assertGreater(solution.distance, 3.4e5)

    def test_bad_arguments(self):
        fn = make_travel_time_fn(propulsion_data['chemical-rocket'])
        with self.assertRaises(ValueError):
            plan_intercept(self.earth, self.mars, 0.0, 0.0, fn, epoch=self.epoch)
        with self.assertRaises(ValueError):
            plan_intercept(self.earth, self.mars, 0.0, self.scale, fn, epoch=self.epoch, max_rounds=0)


if __name__ == '__main__':
    unittest.main()
