"""
Unit Tests for Element Conversion and Regime Selection

Run with:
    python -m pytest tests/test_mean_elements.py -v
"""

import math
import unittest

from orbit_engine.constants import (
    EARTH_RADIUS_KM,
    QOMS2T,
    S_STAR,
    TWOPI,
    XKE,
    X2O3,
)
from orbit_engine.elements import ElementSet
from orbit_engine.errors import InvalidElementError
from orbit_engine.mean_elements import (
    classify_regime,
    convert_elements,
    derive_mean_elements,
)


def semi_major_axis_for_perigee(perigee_km, eccentricity=0.0):
    """Semi-major axis (earth radii) giving the requested perigee height."""
    return (1.0 + perigee_km / EARTH_RADIUS_KM) / (1.0 - eccentricity)


class TestConvertElements(unittest.TestCase):
    """Test recovery of the original mean motion and semi-major axis."""

    def test_near_earth_values(self):
        """Test the SPACETRACK REPORT NO. 3 test satellite."""
        n0 = 16.05824518 * TWOPI / 1440.0
        a0dp, n0dp = convert_elements(n0, 0.0086731, math.radians(72.8435))

        # J2 correction is a few parts in ten thousand
        self.assertLess(abs(n0dp / n0 - 1.0), 1e-3)
        self.assertNotEqual(n0dp, n0)
        # a0'' agrees with Kepler's third law for n0'' to second order
        self.assertAlmostEqual(a0dp, (XKE / n0dp) ** X2O3, places=8)

    def test_correction_sign_follows_inclination(self):
        """Test that n0'' exceeds n0 when 3cos^2 i - 1 < 0 and is below it otherwise."""
        n0 = 14.0 * TWOPI / 1440.0
        _, n0dp = convert_elements(n0, 0.001, math.pi / 2.0)
        self.assertGreater(n0dp, n0)

        _, n0dp_equatorial = convert_elements(n0, 0.001, 0.0)
        self.assertLess(n0dp_equatorial, n0)

    def test_degenerate_inputs(self):
        """Test that degenerate orbits are rejected."""
        with self.assertRaises(InvalidElementError):
            convert_elements(0.0, 0.001, 0.5)
        with self.assertRaises(InvalidElementError):
            convert_elements(0.06, 1.0, 0.5)


class TestClassifyRegime(unittest.TestCase):
    """Test branch selection and drag density parameters."""

    def test_nominal_perigee(self):
        """Test that perigee above 220 km uses the full drag model."""
        a = semi_major_axis_for_perigee(400.0)
        mean = classify_regime(0.0, a, XKE / a ** 1.5)
        self.assertAlmostEqual(mean.perigee_km, 400.0, places=6)
        self.assertFalse(mean.is_low_perigee)
        self.assertFalse(mean.is_deep_space)
        self.assertFalse(mean.uses_simplified_drag)
        self.assertEqual(mean.s_param, S_STAR)
        self.assertEqual(mean.qoms24, QOMS2T)

    def test_simplified_drag_band(self):
        """Test that 156 km <= perigee < 220 km only simplifies drag."""
        a = semi_major_axis_for_perigee(200.0)
        mean = classify_regime(0.0, a, XKE / a ** 1.5)
        self.assertTrue(mean.is_low_perigee)
        self.assertTrue(mean.uses_simplified_drag)
        self.assertEqual(mean.s_param, S_STAR)
        self.assertEqual(mean.qoms24, QOMS2T)

    def test_low_perigee_s_parameter(self):
        """Test that 98 km <= perigee < 156 km tracks the perigee height."""
        a = semi_major_axis_for_perigee(120.0)
        mean = classify_regime(0.0, a, XKE / a ** 1.5)
        s_km = mean.perigee_km - 78.0
        self.assertAlmostEqual(mean.s_param, s_km / EARTH_RADIUS_KM + 1.0, places=12)
        self.assertAlmostEqual(mean.qoms24, ((120.0 - s_km) / EARTH_RADIUS_KM) ** 4, places=20)

    def test_floor_s_parameter(self):
        """Test that perigee below 98 km uses the fixed 20 km floor."""
        for perigee in (97.0, 50.0, -100.0):
            with self.subTest(perigee=perigee):
                a = semi_major_axis_for_perigee(perigee, 0.1)
                mean = classify_regime(0.1, a, XKE / a ** 1.5)
                self.assertAlmostEqual(mean.s_param, 20.0 / EARTH_RADIUS_KM + 1.0, places=12)
                self.assertAlmostEqual(mean.qoms24, (100.0 / EARTH_RADIUS_KM) ** 4, places=20)

    def test_deep_space_threshold(self):
        """Test the 225 minute period threshold."""
        n_threshold = TWOPI / 225.0
        a = (XKE / n_threshold) ** X2O3

        just_above = classify_regime(0.0, a, n_threshold * (1.0 - 1e-9))
        self.assertTrue(just_above.is_deep_space)
        self.assertTrue(just_above.uses_simplified_drag)

        just_below = classify_regime(0.0, a, n_threshold * (1.0 + 1e-9))
        self.assertFalse(just_below.is_deep_space)

    def test_apogee(self):
        """Test apogee height for an eccentric orbit."""
        mean = classify_regime(0.5, 2.0, XKE / 2.0 ** 1.5)
        self.assertAlmostEqual(mean.apogee_km, 2.0 * EARTH_RADIUS_KM, places=6)
        self.assertAlmostEqual(mean.perigee_km, 0.0, places=6)


class TestDeriveMeanElements(unittest.TestCase):
    """Test the combined converter and classifier."""

    def test_geosynchronous_is_deep_space(self):
        """Test that a geosynchronous orbit selects the deep-space branch."""
        elements = ElementSet.from_degrees(1.0027, 0.0002, 0.1, 0.0, 0.0, 0.0)
        mean = derive_mean_elements(elements)
        self.assertTrue(mean.is_deep_space)
        self.assertAlmostEqual(mean.period_minutes, 1436.1, delta=1.0)
        self.assertGreater(mean.perigee_km, 35000.0)

    def test_leo_is_near_earth(self):
        """Test that a low orbit selects the near-Earth branch."""
        elements = ElementSet.from_degrees(15.5, 0.0005, 51.6, 0.0, 0.0, 0.0)
        mean = derive_mean_elements(elements)
        self.assertFalse(mean.is_deep_space)
        self.assertFalse(mean.is_low_perigee)
        self.assertGreater(mean.perigee_km, 300.0)
        self.assertLess(mean.perigee_km, 450.0)


if __name__ == "__main__":
    unittest.main()
