"""
Periodic Corrector

Long-period (J3) and short-period (J2) corrections. Both work in the
non-singular variables axn = e*cos(omega), ayn = e*sin(omega), so neither
divides by the eccentricity.
"""

import math
from typing import NamedTuple

from orbit_engine.coefficients import PerturbationCoefficients, long_period_coefficients
from orbit_engine.constants import EARTH_RADIUS_KM, J2, TWOPI, XKE
from orbit_engine.errors import OrbitDecayedError
from orbit_engine.secular import SecularElements


class LongPeriodElements(NamedTuple):
    axn: float
    ayn: float
    mean_longitude: float
    u: float  # mean longitude minus node, reduced modulo 2pi
    sinip: float
    cosip: float
    con41: float
    x1mth2: float
    x7thm1: float


class CorrectedElements(NamedTuple):
    """Osculating quantities handed to the state reconstructor."""

    radius: float  # earth radii
    arg_latitude: float
    raan: float
    inclination: float
    radial_velocity: float  # earth radii per (1/ke) minutes
    transverse_velocity: float
    tsince: float


class PropagatedElements(NamedTuple):
    """Time-advanced orbital elements at the requested elapsed time."""

    tsince: float
    semi_major_axis: float  # km
    eccentricity: float
    inclination: float
    raan: float
    arg_perigee: float
    mean_anomaly: float
    eccentric_anomaly: float
    true_anomaly: float
    mean_motion: float  # rad/min


def apply_long_period(secular: SecularElements, coefficients: PerturbationCoefficients,
                      is_deep_space: bool) -> LongPeriodElements:
    """
    Add the J3 long-period terms.

    Deep-space inclination changes under lunar-solar perturbation, so the
    inclination functions are recomputed from the perturbed value; near-Earth
    orbits reuse the epoch values.
    """
    if is_deep_space:
        sinip = math.sin(secular.inclination)
        cosip = math.cos(secular.inclination)
        xlcof, aycof = long_period_coefficients(sinip, cosip)
        cosisq = cosip * cosip
        con41 = 3.0 * cosisq - 1.0
        x1mth2 = 1.0 - cosisq
        x7thm1 = 7.0 * cosisq - 1.0
    else:
        c = coefficients
        sinip, cosip = c.sinio, c.cosio
        xlcof, aycof = c.xlcof, c.aycof
        con41, x1mth2, x7thm1 = c.con41, c.x1mth2, c.x7thm1

    ep = secular.eccentricity
    argpp = secular.arg_perigee
    axnl = ep * math.cos(argpp)
    temp = 1.0 / (secular.semi_major_axis * (1.0 - ep * ep))
    aynl = ep * math.sin(argpp) + temp * aycof
    xl = secular.mean_anomaly + argpp + secular.raan + temp * xlcof * axnl
    u = math.fmod(xl - secular.raan, TWOPI)

    return LongPeriodElements(
        axn=axnl,
        ayn=aynl,
        mean_longitude=xl,
        u=u,
        sinip=sinip,
        cosip=cosip,
        con41=con41,
        x1mth2=x1mth2,
        x7thm1=x7thm1,
    )


def apply_short_period(secular: SecularElements, long_period: LongPeriodElements,
                       eo1: float):
    """
    Apply the J2 short-period terms.

    Args:
        secular: Secular elements at t
        long_period: Long-period corrected non-singular elements
        eo1: Solution E + omega of the generalized Kepler equation

    Returns:
        Tuple of (CorrectedElements, PropagatedElements)

    Raises:
        OrbitDecayedError: If the semi-latus rectum is negative or the
            corrected radius is below the Earth's surface
    """
    t = secular.tsince
    am = secular.semi_major_axis
    nm = secular.mean_motion
    axnl = long_period.axn
    aynl = long_period.ayn
    cosip = long_period.cosip
    sinip = long_period.sinip

    sineo1 = math.sin(eo1)
    coseo1 = math.cos(eo1)
    ecose = axnl * coseo1 + aynl * sineo1
    esine = axnl * sineo1 - aynl * coseo1
    el2 = axnl * axnl + aynl * aynl
    pl = am * (1.0 - el2)
    if pl < 0.0:
        raise OrbitDecayedError(f"Semi-latus rectum {pl:.6e} is negative", code=4, tsince=t)

    rl = am * (1.0 - ecose)
    rdotl = math.sqrt(am) * esine / rl
    rvdotl = math.sqrt(pl) / rl
    betal = math.sqrt(1.0 - el2)
    temp = esine / (1.0 + betal)
    sinu = am / rl * (sineo1 - aynl - axnl * temp)
    cosu = am / rl * (coseo1 - axnl + aynl * temp)
    su = math.atan2(sinu, cosu)
    sin2u = (cosu + cosu) * sinu
    cos2u = 1.0 - 2.0 * sinu * sinu
    temp = 1.0 / pl
    temp1 = 0.5 * J2 * temp
    temp2 = temp1 * temp

    mrt = rl * (1.0 - 1.5 * temp2 * betal * long_period.con41) \
        + 0.5 * temp1 * long_period.x1mth2 * cos2u
    if mrt < 1.0:
        raise OrbitDecayedError(
            f"Orbital radius {mrt * EARTH_RADIUS_KM:.3f} km is below the Earth's surface",
            code=6, tsince=t,
        )

    corrected = CorrectedElements(
        radius=mrt,
        arg_latitude=su - 0.25 * temp2 * long_period.x7thm1 * sin2u,
        raan=secular.raan + 1.5 * temp2 * cosip * sin2u,
        inclination=secular.inclination + 1.5 * temp2 * cosip * sinip * cos2u,
        radial_velocity=rdotl - nm * temp1 * long_period.x1mth2 * sin2u / XKE,
        transverse_velocity=rvdotl + nm * temp1 * (
            long_period.x1mth2 * cos2u + 1.5 * long_period.con41) / XKE,
        tsince=t,
    )

    # Perigee direction of the long-period corrected orbit
    omega = math.atan2(aynl, axnl)
    propagated = PropagatedElements(
        tsince=t,
        semi_major_axis=am * EARTH_RADIUS_KM,
        eccentricity=secular.eccentricity,
        inclination=secular.inclination,
        raan=secular.raan % TWOPI,
        arg_perigee=secular.arg_perigee % TWOPI,
        mean_anomaly=secular.mean_anomaly % TWOPI,
        eccentric_anomaly=(eo1 - omega) % TWOPI,
        true_anomaly=(su - omega) % TWOPI,
        mean_motion=nm,
    )
    return corrected, propagated
