"""
Secular Integrator

Advances the mean elements to the requested time: secular gravity (J2, J4),
the drag polynomial in t, and for deep-space orbits the lunar-solar rates,
the resonance integrator and the lunar-solar long-period terms.
"""

import math
from typing import NamedTuple, Optional

from orbit_engine.coefficients import PerturbationCoefficients
from orbit_engine.constants import (
    DECAY_ECCENTRICITY,
    MIN_ECCENTRICITY,
    TWOPI,
    X2O3,
    XKE,
)
from orbit_engine.deep_space import (
    DeepSpaceCoefficients,
    apply_deep_space_periodics,
    apply_deep_space_secular,
)
from orbit_engine.elements import ElementSet
from orbit_engine.errors import OrbitDecayedError
from orbit_engine.mean_elements import MeanElements


class SecularElements(NamedTuple):
    """Mean elements at time t, before short-period corrections."""

    semi_major_axis: float  # earth radii
    mean_motion: float  # rad/min
    eccentricity: float
    inclination: float
    raan: float
    arg_perigee: float
    mean_anomaly: float
    tsince: float


def integrate_secular(
    elements: ElementSet,
    mean: MeanElements,
    coefficients: PerturbationCoefficients,
    deep_space: Optional[DeepSpaceCoefficients],
    tsince: float,
) -> SecularElements:
    """
    Update the mean elements for secular gravity and atmospheric drag.

    Args:
        elements: Element set at epoch
        mean: Refined mean elements
        coefficients: Cached perturbation coefficients
        deep_space: Cached deep-space coefficients, or None for near-Earth orbits
        tsince: Minutes since epoch (may be negative)

    Returns:
        SecularElements at tsince

    Raises:
        OrbitDecayedError: If the integrated orbit is no longer physical
    """
    c = coefficients
    t = tsince
    bstar = elements.bstar
    no = mean.mean_motion

    xmdf = elements.mean_anomaly + c.mdot * t
    argpdf = elements.arg_perigee + c.argpdot * t
    nodedf = elements.raan + c.nodedot * t
    argpm = argpdf
    mm = xmdf
    t2 = t * t
    nodem = nodedf + c.nodecf * t2
    tempa = 1.0 - c.c1 * t
    tempe = bstar * c.c4 * t
    templ = c.t2cof * t2

    drag = c.higher_order
    if drag is not None:
        delomg = drag.omgcof * t
        delmtemp = 1.0 + c.eta * math.cos(xmdf)
        delm = drag.xmcof * (delmtemp * delmtemp * delmtemp - drag.delmo)
        temp = delomg + delm
        mm = xmdf + temp
        argpm = argpdf - temp
        t3 = t2 * t
        t4 = t3 * t
        tempa = tempa - drag.d2 * t2 - drag.d3 * t3 - drag.d4 * t4
        tempe = tempe + bstar * c.c5 * (math.sin(mm) - drag.sinmao)
        templ = templ + drag.t3cof * t3 + t4 * (drag.t4cof + t * drag.t5cof)

    nm = no
    em = elements.eccentricity
    inclm = elements.inclination
    if deep_space is not None:
        em, argpm, inclm, mm, nodem, nm = apply_deep_space_secular(
            deep_space, elements, c, no, t, em, argpm, inclm, mm, nodem
        )

    if nm <= 0.0:
        raise OrbitDecayedError(f"Mean motion {nm:.6e} rad/min is not positive", code=2, tsince=t)
    if tempa <= 0.0:
        raise OrbitDecayedError(
            f"Drag has reduced the semi-major axis to zero (1 - C1*t = {tempa:.6f})",
            code=5, tsince=t,
        )

    am = (XKE / nm) ** X2O3 * tempa * tempa
    nm = XKE / am ** 1.5
    em = em - tempe

    if em >= 1.0 or em < DECAY_ECCENTRICITY:
        raise OrbitDecayedError(f"Mean eccentricity {em:.6f} outside [0, 1)", code=1, tsince=t)
    if em < MIN_ECCENTRICITY:
        em = MIN_ECCENTRICITY

    mm = mm + no * templ
    xlm = mm + argpm + nodem
    nodem = math.fmod(nodem, TWOPI)
    argpm = math.fmod(argpm, TWOPI)
    xlm = math.fmod(xlm, TWOPI)
    mm = math.fmod(xlm - argpm - nodem, TWOPI)

    ep, xincp, nodep, argpp, mp = em, inclm, nodem, argpm, mm
    if deep_space is not None:
        ep, xincp, nodep, argpp, mp = apply_deep_space_periodics(
            deep_space, t, ep, xincp, nodep, argpp, mp
        )
        if xincp < 0.0:
            xincp = -xincp
            nodep = nodep + math.pi
            argpp = argpp - math.pi
        if ep < 0.0 or ep >= 1.0:
            raise OrbitDecayedError(
                f"Perturbed eccentricity {ep:.6f} outside [0, 1)", code=3, tsince=t
            )

    return SecularElements(
        semi_major_axis=am,
        mean_motion=nm,
        eccentricity=ep,
        inclination=xincp,
        raan=nodep,
        arg_perigee=argpp,
        mean_anomaly=mp,
        tsince=t,
    )
