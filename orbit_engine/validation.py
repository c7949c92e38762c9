"""
Reference Validation

Checks the engine against the published SPACETRACK REPORT NO. 3 test vectors
and against the sgp4 library (Vallado's reference code) initialized with the
same elements and the same WGS-72 constants.

Run with:
    python -m orbit_engine.validation
"""

import logging
from typing import Any, Dict, Iterable, List

import numpy as np
from sgp4.api import WGS72OLD, Satrec

from orbit_engine.constants import JD_1950, REFERENCE_TEST_TLE
from orbit_engine.elements import ElementSet
from orbit_engine.logging_config import configure_logging
from orbit_engine.satellite import Satellite

logger = logging.getLogger(__name__)


# Published TEME states at epoch (Vallado et al. 2006, Appendix)
REFERENCE_CASES: List[Dict[str, Any]] = [
    {
        "name": "88888 (near-Earth, SGP4)",
        "line1": REFERENCE_TEST_TLE["line1"],
        "line2": REFERENCE_TEST_TLE["line2"],
        "tsince": 0.0,
        "position_km": REFERENCE_TEST_TLE["position_km"],
        "velocity_kms": REFERENCE_TEST_TLE["velocity_kms"],
    },
    {
        "name": "11801 (deep-space, SDP4)",
        "line1": "1 11801U          80230.29629788  .01431103  00000-0  14311-1 0    13",
        "line2": "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848    13",
        "tsince": 0.0,
        "position_km": (7473.37066650, 428.95261765, 5828.74786377),
        "velocity_kms": (5.10715413, 6.44468284, -0.18613096),
    },
]


def library_satrec(elements: ElementSet) -> Satrec:
    """
    Initialize the sgp4 library's propagator from an element set.

    Args:
        elements: Element set

    Returns:
        Satrec initialized with WGS72OLD constants in improved mode
    """
    satrec = Satrec()
    satrec.sgp4init(
        WGS72OLD,
        'i',
        elements.satnum,
        elements.epoch - JD_1950,
        elements.bstar,
        0.0,
        0.0,
        elements.eccentricity,
        elements.arg_perigee,
        elements.inclination,
        elements.mean_anomaly,
        elements.mean_motion,
        elements.raan,
    )
    return satrec


def compare_with_library(elements: ElementSet, times: Iterable[float]) -> Dict[str, float]:
    """
    Compare propagated states with the sgp4 library.

    Args:
        elements: Element set
        times: Minutes since epoch

    Returns:
        Dictionary with the maximum position (km) and velocity (km/s) differences

    Raises:
        RuntimeError: If the sgp4 library reports an error at one of the times
    """
    satellite = Satellite(elements)
    satrec = library_satrec(elements)

    max_position_error = 0.0
    max_velocity_error = 0.0
    for tsince in times:
        error, r_ref, v_ref = satrec.sgp4_tsince(tsince)
        if error != 0:
            raise RuntimeError(f"sgp4 library error {error} at t = {tsince} min")

        state = satellite.propagate(tsince)
        max_position_error = max(max_position_error,
                                 float(np.linalg.norm(state.r - np.array(r_ref))))
        max_velocity_error = max(max_velocity_error,
                                 float(np.linalg.norm(state.v - np.array(v_ref))))

    return {
        "max_position_error_km": max_position_error,
        "max_velocity_error_kms": max_velocity_error,
    }


def validate_reference(tolerance_km: float = 1e-2, tolerance_kms: float = 1e-5) -> Dict[str, Any]:
    """
    Validate against the published reference vectors.

    Args:
        tolerance_km: Allowed position error (km)
        tolerance_kms: Allowed velocity error (km/s)

    Returns:
        Dictionary with per-case errors and an overall 'passed' flag
    """
    results = []
    for case in REFERENCE_CASES:
        satellite = Satellite.from_tle(case["line1"], case["line2"], case["name"])
        state = satellite.propagate(case["tsince"])

        position_error = float(np.linalg.norm(state.r - np.array(case["position_km"])))
        velocity_error = float(np.linalg.norm(state.v - np.array(case["velocity_kms"])))
        passed = position_error <= tolerance_km and velocity_error <= tolerance_kms

        logger.info(
            f"{case['name']}: t={case['tsince']:.1f} min, "
            f"position error {position_error:.3e} km, "
            f"velocity error {velocity_error:.3e} km/s "
            f"({'PASS' if passed else 'FAIL'})"
        )
        results.append({
            "name": case["name"],
            "method": satellite.method,
            "position_error_km": position_error,
            "velocity_error_kms": velocity_error,
            "passed": passed,
        })

    return {
        "cases": results,
        "passed": all(r["passed"] for r in results),
    }


if __name__ == "__main__":
    configure_logging()
    summary = validate_reference()
    logger.info(f"Reference validation {'passed' if summary['passed'] else 'FAILED'}")
