import dataclasses
import unittest

from orrery import DEFAULT_CONFIG, SimulationConfig, make_config


class TestConfig(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(DEFAULT_CONFIG.kepler_iterations, 5)
        self.assertEqual(DEFAULT_CONFIG.intercept_max_rounds, 10)
        self.assertEqual(DEFAULT_CONFIG.intercept_tolerance, 1e-3)
        self.assertEqual(DEFAULT_CONFIG.distance_scale, 50.0)
        self.assertFalse(DEFAULT_CONFIG.strict)
        self.assertEqual(make_config(), SimulationConfig())

    def test_scale_mode(self):
        self.assertEqual(make_config(scale_mode='Realistic').distance_scale, 100.0)
        with self.assertRaises(ValueError):
            make_config(scale_mode='planetarium')

    def test_validation(self):
        with self.assertRaises(ValueError):
            make_config(time_speed=0.0)
        with self.assertRaises(ValueError):
            make_config(kepler_iterations=0)
        with self.assertRaises(ValueError):
            make_config(intercept_tolerance=1.5)
        with self.assertRaises(ValueError):
            make_config(instantaneous_seconds_per_au=-1.0)

    def test_kepler_method(self):
        self.assertEqual(DEFAULT_CONFIG.kepler_method, 'newton')
        self.assertEqual(make_config(kepler_method='fixed-point').kepler_method, 'fixed-point')
        with self.assertRaises(ValueError):
            make_config(kepler_method='halley')

    def test_arrival_thresholds(self):
        config = make_config(arrival_speed=0.5, flip_arrival_fraction=1.0, coast_arrival_fraction=0.95)
        self.assertEqual(config.arrival_speed, 0.5)
        self.assertEqual(config.flip_arrival_fraction, 1.0)
        self.assertEqual(config.coast_arrival_fraction, 0.95)
        with self.assertRaises(ValueError):
            make_config(arrival_speed=0.0)
        with self.assertRaises(ValueError):
            make_config(arrival_speed=-1.0)
        with self.assertRaises(ValueError):
            make_config(flip_arrival_fraction=0.0)
        with self.assertRaises(ValueError):
            make_config(coast_arrival_fraction=1.01)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.strict = True


if __name__ == '__main__':
    unittest.main()
