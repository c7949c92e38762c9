"""
Comprehensive SGP4/SDP4 Validation Suite

This module provides systematic validation against:
1. Published SPACETRACK REPORT NO. 3 / Vallado et al. (2006) test vectors
2. Cross-validation with the sgp4 library for every propagation regime
3. Physical sanity checks for geosynchronous and Molniya orbits

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.

Run with:
    python -m pytest orbit_engine/tests/test_validation_suite.py -v
"""

import unittest

import numpy as np

from orbit_engine.constants import REFERENCE_TEST_TLE
from orbit_engine.elements import ElementSet
from orbit_engine.satellite import Satellite
from orbit_engine.validation import (
    REFERENCE_CASES,
    compare_with_library,
    library_satrec,
    validate_reference,
)

# Element sets in conventional units (rev/day, degrees) with Julian date epochs
VALIDATION_ELEMENTS = {
    "88888": dict(  # SPACETRACK REPORT NO. 3 near-Earth test satellite
        mean_motion=16.05824518, eccentricity=0.0086731, inclination=72.8435,
        raan=115.9689, arg_perigee=52.6988, mean_anomaly=110.5714,
        bstar=0.66816e-4, epoch=2444514.48708465, satnum=88888,
    ),
    "06251": dict(  # Near-Earth, normal drag
        mean_motion=15.56387291, eccentricity=0.0030035, inclination=58.0579,
        raan=54.0425, arg_perigee=139.1568, mean_anomaly=221.1854,
        bstar=0.12808e-3, epoch=2453912.32412014, satnum=6251,
    ),
    "16.3": dict(  # Near-Earth, perigee below 220 km (simplified drag)
        mean_motion=16.3, eccentricity=0.001, inclination=51.6,
        raan=10.0, arg_perigee=20.0, mean_anomaly=30.0,
        bstar=0.2e-3, epoch=2453912.5, satnum=1,
    ),
    "08195": dict(  # Molniya, 12-hour resonance
        mean_motion=2.00491383, eccentricity=0.6877146, inclination=64.1586,
        raan=279.0717, arg_perigee=264.7651, mean_anomaly=20.2257,
        bstar=0.11873e-3, epoch=2453911.83215444, satnum=8195,
    ),
    "GEO": dict(  # Geosynchronous, 24-hour resonance, Lyddane periodics
        mean_motion=1.00270000, eccentricity=0.0002, inclination=0.05,
        raan=80.0, arg_perigee=120.0, mean_anomaly=250.0,
        bstar=0.0, epoch=2453911.5, satnum=2,
    ),
    "11801": dict(  # Deep-space, non-resonant, high eccentricity
        mean_motion=2.28537848, eccentricity=0.7318036, inclination=46.7916,
        raan=230.4354, arg_perigee=47.4722, mean_anomaly=10.4117,
        bstar=0.14311e-1, epoch=2444468.79629788, satnum=11801,
    ),
}


class SGP4ValidationSuite(unittest.TestCase):
    """Comprehensive validation test suite for the propagation engine"""

    def setUp(self):
        """Initialize test fixtures and reference data"""
        self.elements = {
            name: ElementSet.from_degrees(**values)
            for name, values in VALIDATION_ELEMENTS.items()
        }

    def assertBetween(self, value, low, high, msg=None):
        """Assert low <= value <= high"""
        if not (low <= value <= high):
            standard_msg = f"{value} not between {low} and {high}"
            self.fail(self._formatMessage(msg, standard_msg))

    # Published vectors

    def test_spacetrack_report_88888_at_epoch(self):
        """Test the SPACETRACK REPORT NO. 3 test satellite at t = 0"""
        satellite = Satellite.from_tle(REFERENCE_TEST_TLE["line1"], REFERENCE_TEST_TLE["line2"])
        state = satellite.propagate(0.0)

        position_error = np.linalg.norm(state.r - np.array(REFERENCE_TEST_TLE["position_km"]))
        velocity_error = np.linalg.norm(state.v - np.array(REFERENCE_TEST_TLE["velocity_kms"]))
        self.assertLess(position_error, 1e-2, "Position should match within 10 m")
        self.assertLess(velocity_error, 1e-5, "Velocity should match within 1 cm/s")

    def test_spacetrack_report_88888_from_degrees(self):
        """Test that the same elements given in degrees reproduce the vector"""
        state = Satellite(self.elements["88888"]).propagate(0.0)
        np.testing.assert_allclose(state.r, REFERENCE_TEST_TLE["position_km"], atol=1e-2)
        np.testing.assert_allclose(state.v, REFERENCE_TEST_TLE["velocity_kms"], atol=1e-5)

    def test_reference_cases(self):
        """Test every published reference case through the validation utility"""
        summary = validate_reference()
        self.assertEqual(len(summary["cases"]), len(REFERENCE_CASES))
        for case in summary["cases"]:
            with self.subTest(case=case["name"]):
                self.assertTrue(case["passed"], case)
        self.assertTrue(summary["passed"])

    def test_deep_space_reference_uses_sdp4(self):
        """Test that the 11801 reference case runs on the deep-space branch"""
        summary = validate_reference()
        methods = {case["name"]: case["method"] for case in summary["cases"]}
        self.assertEqual(methods["11801 (deep-space, SDP4)"], "d")
        self.assertEqual(methods["88888 (near-Earth, SGP4)"], "n")

    # Cross-validation with the sgp4 library

    def _cross_validate(self, name, times, tolerance_km, tolerance_kms):
        result = compare_with_library(self.elements[name], times)
        self.assertLess(result["max_position_error_km"], tolerance_km,
                        f"{name}: position differs from sgp4 library")
        self.assertLess(result["max_velocity_error_kms"], tolerance_kms,
                        f"{name}: velocity differs from sgp4 library")

    def test_near_earth_matches_library(self):
        """Test near-Earth propagation over one day, forwards and backwards"""
        times = np.arange(-1440.0, 1441.0, 120.0)
        for name in ("88888", "06251"):
            with self.subTest(name=name):
                self._cross_validate(name, times, 1e-2, 1e-5)

    def test_simplified_drag_matches_library(self):
        """Test the low-perigee simplified drag branch"""
        self.assertTrue(Satellite(self.elements["16.3"]).mean_elements.is_low_perigee)
        self._cross_validate("16.3", np.arange(0.0, 1441.0, 60.0), 1e-2, 1e-5)

    def test_half_day_resonance_matches_library(self):
        """Test 12-hour resonant propagation across several integrator steps"""
        satellite = Satellite(self.elements["08195"])
        self.assertEqual(satellite.deep_space.irez, 2)
        self._cross_validate("08195", np.arange(-2880.0, 2881.0, 360.0), 5e-2, 5e-5)

    def test_synchronous_resonance_matches_library(self):
        """Test geosynchronous propagation with the Lyddane modification"""
        satellite = Satellite(self.elements["GEO"])
        self.assertEqual(satellite.deep_space.irez, 1)
        self._cross_validate("GEO", np.arange(-1440.0, 4321.0, 360.0), 5e-2, 5e-5)

    def test_deep_space_matches_library(self):
        """Test non-resonant deep-space propagation"""
        satellite = Satellite(self.elements["11801"])
        self.assertEqual(satellite.method, "d")
        self.assertEqual(satellite.deep_space.irez, 0)
        self._cross_validate("11801", np.arange(0.0, 1441.0, 360.0), 5e-2, 5e-5)

    def test_library_fixture(self):
        """Test that the library oracle is initialized from the same elements"""
        satrec = library_satrec(self.elements["06251"])
        self.assertEqual(satrec.error, 0)
        self.assertAlmostEqual(satrec.no_kozai, self.elements["06251"].mean_motion, places=14)
        self.assertAlmostEqual(satrec.ecco, 0.0030035, places=14)

    # Physical sanity

    def test_geosynchronous_radius(self):
        """Test that the geosynchronous orbit stays near 42164 km"""
        satellite = Satellite(self.elements["GEO"])
        for tsince in np.arange(0.0, 1440.0 * 7, 720.0):
            with self.subTest(tsince=tsince):
                self.assertBetween(satellite.propagate(float(tsince)).radius_km, 42100.0, 42230.0)

    def test_molniya_apsides(self):
        """Test perigee and apogee radius of the Molniya orbit"""
        satellite = Satellite(self.elements["08195"])
        radii = [satellite.propagate(t).radius_km for t in np.arange(0.0, 720.0, 2.0)]
        mean = satellite.mean_elements
        self.assertBetween(min(radii), mean.perigee_km + 6378.135 - 100.0,
                           mean.perigee_km + 6378.135 + 100.0)
        self.assertBetween(max(radii), mean.apogee_km + 6378.135 - 100.0,
                           mean.apogee_km + 6378.135 + 100.0)


def run_validation_suite():
    """Run the validation suite and print a one-line verdict"""
    suite = unittest.TestLoader().loadTestsFromTestCase(SGP4ValidationSuite)
    result = unittest.TextTestRunner(verbosity=2).run(suite)

    failed = len(result.failures) + len(result.errors)
    print(f"\nSGP4/SDP4 validation: {result.testsRun - failed}/{result.testsRun} passed")
    return result.wasSuccessful()


if __name__ == "__main__":
    run_validation_suite()
