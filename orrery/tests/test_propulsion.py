import unittest

from pydantic import ValidationError

from orrery import (
    InvalidPropulsionProfile,
    PropulsionProfile,
    UnknownPropulsion,
    check_profile,
    format_duration,
    get_propulsion_by_id,
    propulsion_data,
)


class TestPropulsionCatalog(unittest.TestCase):

    def test_catalog(self):
        self.assertEqual(len(propulsion_data), 8)
        chem = get_propulsion_by_id('chemical-rocket')
        self.assertEqual(chem.max_speed, 17.0)
        self.assertEqual(chem.acceleration, 30.0)
        self.assertTrue(chem.supports_flip_and_burn)
        self.assertFalse(chem.is_special)

    def test_special_profiles(self):
        self.assertEqual(propulsion_data['light-speed'].kind, 'constant-velocity')
        self.assertEqual(propulsion_data['warp-drive'].kind, 'instantaneous')
        self.assertTrue(propulsion_data['warp-drive'].is_special)
        self.assertFalse(propulsion_data['light-speed'].supports_flip_and_burn)

    def test_unknown(self):
        with self.assertRaises(UnknownPropulsion):
            get_propulsion_by_id('impulse-drive')


class TestPropulsionValidation(unittest.TestCase):

    def test_negative_acceleration(self):
        with self.assertRaises(ValidationError) as cm:
            PropulsionProfile(id='broken', max_speed=10.0, acceleration=-1.0)
        self.assertIn("acceleration must be non-negative", str(cm.exception))

    def test_non_positive_speed(self):
        with self.assertRaises(ValidationError):
            PropulsionProfile(id='broken', max_speed=0.0, acceleration=1.0)
        with self.assertRaises(ValidationError):
            PropulsionProfile(id='broken', kind='constant-velocity', max_speed=-3.0)

    def test_non_finite(self):
        with self.assertRaises(ValidationError):
            PropulsionProfile(id='broken', max_speed=float('inf'), acceleration=1.0)

    def test_instantaneous_allows_zero_speed(self):
        profile = PropulsionProfile(id='blink', kind='instantaneous', max_speed=0.0)
        self.assertIs(check_profile(profile), profile)

    def test_check_profile_on_unvalidated(self):
        profile = PropulsionProfile.model_construct(id='broken', max_speed=-5.0, acceleration=1.0)
        with self.assertRaises(InvalidPropulsionProfile):
            check_profile(profile)


class TestFormatDuration(unittest.TestCase):

    def test_units(self):
        self.assertEqual(format_duration(45), "45 seconds")
        self.assertEqual(format_duration(120), "2 minutes")
        self.assertEqual(format_duration(7200), "2.0 hours")
        self.assertEqual(format_duration(3 * 86400), "3.0 days")
        self.assertEqual(format_duration(2 * 365.25 * 86400), "2.0 years")
        self.assertEqual(format_duration(5000 * 365.25 * 86400), "5.0 thousand years")


if __name__ == '__main__':
    unittest.main()
