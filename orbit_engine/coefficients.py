"""
Coefficient Builder

Computes, once per element set, every drag and zonal-harmonic coefficient the
secular integrator and periodic corrector need. The result is an immutable
PerturbationCoefficients; the higher-order drag terms are only present when
the full (non-simplified) drag model applies.

References:
    Hoots, F. R., & Roehrich, R. L. (1980). SPACETRACK REPORT NO. 3.
    Vallado, D. A., et al. (2006). Revisiting Spacetrack Report #3.
"""

import math
from typing import NamedTuple, Optional

from orbit_engine.constants import (
    J2,
    J3OJ2,
    J4,
    RETROGRADE_EQUATORIAL_LIMIT,
    SMALL_ECCENTRICITY,
    X2O3,
)
from orbit_engine.elements import ElementSet
from orbit_engine.errors import NumericalInstabilityError
from orbit_engine.mean_elements import MeanElements


class HigherOrderDrag(NamedTuple):
    """Drag terms used only by the full near-Earth drag model (perigee >= 220 km)."""

    d2: float
    d3: float
    d4: float
    t3cof: float
    t4cof: float
    t5cof: float
    omgcof: float
    xmcof: float
    delmo: float
    sinmao: float


class PerturbationCoefficients(NamedTuple):
    """Drag, harmonic and auxiliary coefficients for one element set."""

    # auxiliary scalars
    cosio: float
    sinio: float
    cosio2: float
    eccsq: float
    omeosq: float
    rteosq: float
    posq: float
    con41: float
    con42: float
    x1mth2: float
    x7thm1: float
    # drag geometry
    xi: float
    eta: float
    c1: float
    c2: float
    c3: float
    c4: float
    c5: float
    # secular rates
    mdot: float
    argpdot: float
    nodedot: float
    xpidot: float
    nodecf: float
    t2cof: float
    # long-period
    xlcof: float
    aycof: float
    higher_order: Optional[HigherOrderDrag]


def long_period_coefficients(sinio: float, cosio: float):
    """
    J3 long-period coefficients for a given inclination.

    Near inclination pi the (1 + cos i) divisor is replaced by a fixed small
    value so retrograde equatorial orbits stay finite.

    Returns:
        Tuple of (xlcof, aycof)
    """
    denominator = 1.0 + cosio
    if abs(denominator) <= RETROGRADE_EQUATORIAL_LIMIT:
        denominator = RETROGRADE_EQUATORIAL_LIMIT
    xlcof = -0.25 * J3OJ2 * sinio * (3.0 + 5.0 * cosio) / denominator
    aycof = -0.5 * J3OJ2 * sinio
    return xlcof, aycof


def build_coefficients(elements: ElementSet, mean: MeanElements) -> PerturbationCoefficients:
    """
    Build the perturbation coefficients.

    Args:
        elements: Input element set
        mean: Refined mean elements and regime flags

    Returns:
        PerturbationCoefficients

    Raises:
        NumericalInstabilityError: If |eta| >= 1, which makes the (1 - eta^2)
            drag terms singular
    """
    ecco = elements.eccentricity
    bstar = elements.bstar
    ao = mean.semi_major_axis
    no = mean.mean_motion
    sfour = mean.s_param

    cosio = math.cos(elements.inclination)
    sinio = math.sin(elements.inclination)
    cosio2 = cosio * cosio
    cosio4 = cosio2 * cosio2
    eccsq = ecco * ecco
    omeosq = 1.0 - eccsq
    rteosq = math.sqrt(omeosq)
    po = ao * omeosq
    posq = po * po
    pinvsq = 1.0 / posq
    con42 = 1.0 - 5.0 * cosio2
    con41 = -con42 - cosio2 - cosio2
    x1mth2 = 1.0 - cosio2
    x7thm1 = 7.0 * cosio2 - 1.0

    tsi = 1.0 / (ao - sfour)
    eta = ao * ecco * tsi
    if abs(eta) >= 1.0:
        raise NumericalInstabilityError(
            f"Eccentricity factor |eta| = {abs(eta):.6f} >= 1 "
            f"(a0'' = {ao:.6f}, s = {sfour:.6f} earth radii)"
        )

    etasq = eta * eta
    eeta = ecco * eta
    psisq = 1.0 - etasq
    coef = mean.qoms24 * tsi ** 4
    coef1 = coef / psisq ** 3.5

    cc2 = coef1 * no * (
        ao * (1.0 + 1.5 * etasq + eeta * (4.0 + etasq))
        + 0.375 * J2 * tsi / psisq * con41 * (8.0 + 3.0 * etasq * (8.0 + etasq))
    )
    cc1 = bstar * cc2

    cc3 = 0.0
    if ecco > SMALL_ECCENTRICITY:
        cc3 = -2.0 * coef * tsi * J3OJ2 * no * sinio / ecco

    cc4 = 2.0 * no * coef1 * ao * omeosq * (
        eta * (2.0 + 0.5 * etasq)
        + ecco * (0.5 + 2.0 * etasq)
        - J2 * tsi / (ao * psisq) * (
            -3.0 * con41 * (1.0 - 2.0 * eeta + etasq * (1.5 - 0.5 * eeta))
            + 0.75 * x1mth2 * (2.0 * etasq - eeta * (1.0 + etasq))
            * math.cos(2.0 * elements.arg_perigee)
        )
    )
    cc5 = 2.0 * coef1 * ao * omeosq * (1.0 + 2.75 * (etasq + eeta) + eeta * etasq)

    # Secular rates from J2 (first and second order) and J4
    temp1 = 1.5 * J2 * pinvsq * no
    temp2 = 0.5 * temp1 * J2 * pinvsq
    temp3 = -0.46875 * J4 * pinvsq * pinvsq * no
    mdot = (no + 0.5 * temp1 * rteosq * con41
            + 0.0625 * temp2 * rteosq * (13.0 - 78.0 * cosio2 + 137.0 * cosio4))
    argpdot = (-0.5 * temp1 * con42
               + 0.0625 * temp2 * (7.0 - 114.0 * cosio2 + 395.0 * cosio4)
               + temp3 * (3.0 - 36.0 * cosio2 + 49.0 * cosio4))
    xhdot1 = -temp1 * cosio
    nodedot = xhdot1 + (0.5 * temp2 * (4.0 - 19.0 * cosio2)
                        + 2.0 * temp3 * (3.0 - 7.0 * cosio2)) * cosio
    xpidot = argpdot + nodedot
    nodecf = 3.5 * omeosq * xhdot1 * cc1
    t2cof = 1.5 * cc1

    xlcof, aycof = long_period_coefficients(sinio, cosio)

    higher_order = None
    if not mean.uses_simplified_drag:
        higher_order = _higher_order_drag(elements, ao, sfour, tsi, eta, eeta, coef, cc1, cc3)

    return PerturbationCoefficients(
        cosio=cosio,
        sinio=sinio,
        cosio2=cosio2,
        eccsq=eccsq,
        omeosq=omeosq,
        rteosq=rteosq,
        posq=posq,
        con41=con41,
        con42=con42,
        x1mth2=x1mth2,
        x7thm1=x7thm1,
        xi=tsi,
        eta=eta,
        c1=cc1,
        c2=cc2,
        c3=cc3,
        c4=cc4,
        c5=cc5,
        mdot=mdot,
        argpdot=argpdot,
        nodedot=nodedot,
        xpidot=xpidot,
        nodecf=nodecf,
        t2cof=t2cof,
        xlcof=xlcof,
        aycof=aycof,
        higher_order=higher_order,
    )


def _higher_order_drag(elements, ao, sfour, tsi, eta, eeta, coef, cc1, cc3):
    bstar = elements.bstar

    omgcof = bstar * cc3 * math.cos(elements.arg_perigee)
    # The mean anomaly drag term divides by e*eta, so it is dropped for near-circular orbits
    xmcof = 0.0
    if elements.eccentricity > SMALL_ECCENTRICITY:
        xmcof = -X2O3 * coef * bstar / eeta
    delmotemp = 1.0 + eta * math.cos(elements.mean_anomaly)
    delmo = delmotemp * delmotemp * delmotemp
    sinmao = math.sin(elements.mean_anomaly)

    cc1sq = cc1 * cc1
    d2 = 4.0 * ao * tsi * cc1sq
    temp = d2 * tsi * cc1 / 3.0
    d3 = (17.0 * ao + sfour) * temp
    d4 = 0.5 * temp * ao * tsi * (221.0 * ao + 31.0 * sfour) * cc1
    t3cof = d2 + 2.0 * cc1sq
    t4cof = 0.25 * (3.0 * d3 + cc1 * (12.0 * d2 + 10.0 * cc1sq))
    t5cof = 0.2 * (3.0 * d4 + 12.0 * cc1 * d3 + 6.0 * d2 * d2
                   + 15.0 * cc1sq * (2.0 * d2 + cc1sq))

    return HigherOrderDrag(
        d2=d2,
        d3=d3,
        d4=d4,
        t3cof=t3cof,
        t4cof=t4cof,
        t5cof=t5cof,
        omgcof=omgcof,
        xmcof=xmcof,
        delmo=delmo,
        sinmao=sinmao,
    )
