"""
Element Converter and Regime Classifier

Recovers the "double-primed" mean semi-major axis and mean motion from the
Kozai mean motion of an element set, then classifies the orbit: near-Earth
(SGP4) or deep-space (SDP4), simplified or full drag, and the density
parameter s used by the drag coefficients.
"""

import math
import logging
from typing import NamedTuple, Tuple

from orbit_engine.constants import (
    AE,
    DEEP_SPACE_PERIOD_MINUTES,
    DENSITY_REFERENCE_KM,
    EARTH_RADIUS_KM,
    FLOOR_PERIGEE_KM,
    FLOOR_S_KM,
    K2,
    LOW_PERIGEE_KM,
    NOMINAL_S_KM,
    QOMS2T,
    S_STAR,
    SIMPLIFIED_DRAG_PERIGEE_KM,
    TWOPI,
    X2O3,
    XKE,
)
from orbit_engine.elements import ElementSet
from orbit_engine.errors import InvalidElementError

logger = logging.getLogger(__name__)


class MeanElements(NamedTuple):
    """Refined mean elements and regime flags, computed once per element set."""

    semi_major_axis: float  # a0'', earth radii
    mean_motion: float  # n0'', rad/min
    perigee_km: float
    apogee_km: float
    period_minutes: float
    is_deep_space: bool
    is_low_perigee: bool
    s_param: float  # earth radii
    qoms24: float

    @property
    def uses_simplified_drag(self) -> bool:
        """Higher-order drag terms are dropped for low perigee and deep space."""
        return self.is_low_perigee or self.is_deep_space


def convert_elements(mean_motion: float, eccentricity: float,
                     inclination: float) -> Tuple[float, float]:
    """
    Remove the first-order J2 bias from the Kozai mean motion.

    Args:
        mean_motion: Kozai mean motion n0 (rad/min)
        eccentricity: Eccentricity e0
        inclination: Inclination i0 (rad)

    Returns:
        Tuple of (a0'' in earth radii, n0'' in rad/min)

    Raises:
        InvalidElementError: For a degenerate orbit
    """
    if mean_motion <= 0.0:
        raise InvalidElementError(f"Mean motion must be positive, got {mean_motion}", code=2)

    betao2 = 1.0 - eccentricity * eccentricity
    if betao2 <= 0.0:
        raise InvalidElementError(f"Eccentricity {eccentricity} gives a degenerate orbit", code=1)

    cosio = math.cos(inclination)
    theta2 = cosio * cosio

    a1 = (XKE / mean_motion) ** X2O3
    d1 = 1.5 * K2 * (3.0 * theta2 - 1.0) / (betao2 * math.sqrt(betao2))
    del1 = d1 / (a1 * a1)
    a0 = a1 * (1.0 - del1 / 3.0 - del1 * del1 - 134.0 * del1 ** 3 / 81.0)
    if a0 <= 0.0:
        raise InvalidElementError(f"Mean motion {mean_motion} rad/min gives a non-positive semi-major axis")

    del0 = d1 / (a0 * a0)
    if 1.0 - del0 <= 0.0:
        raise InvalidElementError(f"Mean motion {mean_motion} rad/min is too high to refine")

    n0dp = mean_motion / (1.0 + del0)
    a0dp = a0 / (1.0 - del0)
    return a0dp, n0dp


def classify_regime(eccentricity: float, semi_major_axis: float,
                    mean_motion: float) -> MeanElements:
    """
    Select the propagation branch and the drag density parameters.

    Args:
        eccentricity: Eccentricity e0
        semi_major_axis: a0'' (earth radii)
        mean_motion: n0'' (rad/min)

    Returns:
        MeanElements with regime flags filled in
    """
    perigee_km = (semi_major_axis * (1.0 - eccentricity) - AE) * EARTH_RADIUS_KM
    apogee_km = (semi_major_axis * (1.0 + eccentricity) - AE) * EARTH_RADIUS_KM
    period = TWOPI / mean_motion

    s_param = S_STAR
    qoms24 = QOMS2T
    if perigee_km < LOW_PERIGEE_KM:
        s_km = perigee_km - NOMINAL_S_KM
        if perigee_km < FLOOR_PERIGEE_KM:
            s_km = FLOOR_S_KM
        qoms24 = ((DENSITY_REFERENCE_KM - s_km) / EARTH_RADIUS_KM) ** 4
        s_param = s_km / EARTH_RADIUS_KM + AE

    return MeanElements(
        semi_major_axis=semi_major_axis,
        mean_motion=mean_motion,
        perigee_km=perigee_km,
        apogee_km=apogee_km,
        period_minutes=period,
        is_deep_space=period >= DEEP_SPACE_PERIOD_MINUTES,
        is_low_perigee=perigee_km < SIMPLIFIED_DRAG_PERIGEE_KM,
        s_param=s_param,
        qoms24=qoms24,
    )


def derive_mean_elements(elements: ElementSet) -> MeanElements:
    """Run the element converter and regime classifier for one element set."""
    a0dp, n0dp = convert_elements(elements.mean_motion, elements.eccentricity,
                                  elements.inclination)
    mean = classify_regime(elements.eccentricity, a0dp, n0dp)
    logger.debug(
        f"Satellite {elements.satnum}: period {mean.period_minutes:.2f} min, "
        f"perigee {mean.perigee_km:.1f} km, "
        f"{'deep-space' if mean.is_deep_space else 'near-Earth'} branch"
    )
    return mean
