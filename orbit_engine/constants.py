"""
SGP4 Model Constants

Physical and model constants shared by every stage of the propagation engine.

Constants:
    WGS-72 gravitational constants exactly as tabulated in SPACETRACK REPORT
    NO. 3 (the set the sgp4 library calls "WGS72OLD"). The published test
    vectors were generated with these values, so they are fixed rather than
    configurable.

Reference Test TLE:
    The SPACETRACK REPORT NO. 3 near-Earth test satellite (88888), used by the
    validation utility and the test suite.

References:
    Hoots, F. R., & Roehrich, R. L. (1980). SPACETRACK REPORT NO. 3:
    Models for Propagation of NORAD Element Sets.

    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math
from typing import Dict, Any

# WGS-72 Gravitational Constants (SPACETRACK REPORT NO. 3)
EARTH_RADIUS_KM: float = 6378.135  # Earth equatorial radius (km)
XKE: float = 7.43669161e-2  # sqrt(GM) in earth radii^1.5 per minute
J2: float = 1.082616e-3  # Second zonal harmonic coefficient
J3: float = -2.53881e-6  # Third zonal harmonic coefficient
J4: float = -1.65597e-6  # Fourth zonal harmonic coefficient
K2: float = 0.5 * J2  # 5.413080e-4
J3OJ2: float = J3 / J2

# Normalized units: distances in earth radii, time in minutes
AE: float = 1.0
VKMPERSEC: float = EARTH_RADIUS_KM * XKE / 60.0  # earth radii/min scaled to km/s

# Atmospheric density model parameters
S_STAR: float = AE + 78.0 / EARTH_RADIUS_KM  # 1.01222928
QOMS2T: float = ((120.0 - 78.0) / EARTH_RADIUS_KM) ** 4  # 1.88027916e-9

# Angles
TWOPI: float = 2.0 * math.pi
DEG2RAD: float = math.pi / 180.0
XPDOTP: float = 1440.0 / TWOPI  # rev/day per rad/min
X2O3: float = 2.0 / 3.0
MINUTES_PER_DAY: float = 1440.0

# Regime selection
DEEP_SPACE_PERIOD_MINUTES: float = 225.0
SIMPLIFIED_DRAG_PERIGEE_KM: float = 220.0
LOW_PERIGEE_KM: float = 156.0
FLOOR_PERIGEE_KM: float = 98.0
FLOOR_S_KM: float = 20.0
NOMINAL_S_KM: float = 78.0
DENSITY_REFERENCE_KM: float = 120.0

# Singularity guards
SMALL_ECCENTRICITY: float = 1.0e-4  # below this C3 and the mean anomaly drag term vanish
MIN_ECCENTRICITY: float = 1.0e-6
DECAY_ECCENTRICITY: float = -0.001
RETROGRADE_EQUATORIAL_LIMIT: float = 1.5e-12
LYDDANE_INCLINATION: float = 0.2  # rad
EQUATORIAL_INCLINATION: float = 5.2359877e-2  # 3 degrees, in rad

# Kepler solver
KEPLER_TOLERANCE: float = 1.0e-12
KEPLER_MAX_ITERATIONS: int = 10
KEPLER_MAX_STEP: float = 0.95

# Julian dates
JD_1950: float = 2433281.5  # 1950 January 0.0 UT
JD_J2000: float = 2451545.0

# SPACETRACK REPORT NO. 3 near-Earth test satellite
REFERENCE_TEST_TLE: Dict[str, Any] = {
    'name': 'SPACETRACK REPORT 3 TEST SATELLITE',
    'norad_id': 88888,
    'line1': '1 88888U          80275.98708465  .00073094  13844-3  66816-4 0     8',
    'line2': '2 88888  72.8435 115.9689 0086731  52.6988 110.5714 16.05824518   105',
    'mean_motion': 16.05824518,
    'inclination': 72.8435,
    'eccentricity': 0.0086731,
    'position_km': (2328.97048951, -5995.22076416, 1719.97067261),
    'velocity_kms': (2.91207230, -0.98341546, -7.09081703),
}
