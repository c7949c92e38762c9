"""
Deep-Space (SDP4) Perturbations

Lunar-solar and Earth-resonance terms for orbits with periods of 225 minutes
or more:

- init_deep_space: lunar-solar periodic coefficients, lunar-solar secular
  rates and, for 12-hour and 24-hour orbits, the resonance coefficients
- apply_deep_space_secular: secular rates plus numerical integration of the
  resonance equations
- apply_deep_space_periodics: lunar-solar long-period terms, with the
  Lyddane modification at low inclination

The resonance integrator always starts from epoch, so a result depends only
on the requested time and never on earlier calls.

References:
    Hujsak, R. S. (1979). A Restricted Four Body Solution for Resonating
    Satellites Without Drag. SPACETRACK REPORT NO. 1.
    Vallado, D. A., et al. (2006). Revisiting Spacetrack Report #3.
"""

import math
from typing import NamedTuple, Tuple

from orbit_engine.constants import (
    EQUATORIAL_INCLINATION,
    JD_1950,
    JD_J2000,
    LYDDANE_INCLINATION,
    DEG2RAD,
    TWOPI,
    X2O3,
    XKE,
)

# Solar and lunar constants
ZNS = 1.19459e-5
ZES = 0.01675
ZNL = 1.5835218e-4
ZEL = 0.05490
C1SS = 2.9864797e-6
C1L = 4.7968065e-7
ZSINIS = 0.39785416
ZCOSIS = 0.91744867
ZCOSGS = 0.1945905
ZSINGS = -0.98088458

# Earth rotation rate (rad/min) and resonance constants
RPTIM = 4.37526908801129966e-3
Q22 = 1.7891679e-6
Q31 = 2.1460748e-6
Q33 = 2.2123015e-7
ROOT22 = 1.7891679e-6
ROOT32 = 3.7393792e-7
ROOT44 = 7.3636953e-9
ROOT52 = 1.1428639e-7
ROOT54 = 2.1765803e-9
FASX2 = 0.13130908
FASX4 = 2.8843198
FASX6 = 0.37448087
G22 = 5.7686396
G32 = 0.95240898
G44 = 1.8014998
G52 = 1.0508330
G54 = 4.4108898

# Resonance integrator step (minutes) and step^2 / 2
STEP = 720.0
STEP2 = 259200.0

# Resonance bands (rad/min)
SYNCHRONOUS_BAND = (0.0034906585, 0.0052359877)
HALF_DAY_BAND = (8.26e-3, 9.24e-3)
HALF_DAY_MIN_ECCENTRICITY = 0.5

NO_RESONANCE = 0
SYNCHRONOUS_RESONANCE = 1
HALF_DAY_RESONANCE = 2


class DeepSpaceCoefficients(NamedTuple):
    """Lunar-solar and resonance coefficients, computed once per element set."""

    gsto: float
    # solar periodic coefficients
    se2: float
    se3: float
    si2: float
    si3: float
    sl2: float
    sl3: float
    sl4: float
    sgh2: float
    sgh3: float
    sgh4: float
    sh2: float
    sh3: float
    # lunar periodic coefficients
    ee2: float
    e3: float
    xi2: float
    xi3: float
    xl2: float
    xl3: float
    xl4: float
    xgh2: float
    xgh3: float
    xgh4: float
    xh2: float
    xh3: float
    zmos: float
    zmol: float
    # lunar-solar secular rates
    dedt: float
    didt: float
    dmdt: float
    domdt: float
    dnodt: float
    # resonance
    irez: int
    d2201: float
    d2211: float
    d3210: float
    d3222: float
    d4410: float
    d4422: float
    d5220: float
    d5232: float
    d5421: float
    d5433: float
    del1: float
    del2: float
    del3: float
    xfact: float
    xlamo: float


class _BodyTerms(NamedTuple):
    s1: float
    s2: float
    s3: float
    s4: float
    s5: float
    s6: float
    s7: float
    z1: float
    z2: float
    z3: float
    z11: float
    z12: float
    z13: float
    z21: float
    z22: float
    z23: float
    z31: float
    z32: float
    z33: float


def gstime(jdut1: float) -> float:
    """
    Greenwich mean sidereal time (IAU-82).

    Args:
        jdut1: Julian date (UT1)

    Returns:
        Sidereal angle in [0, 2pi) (rad)
    """
    tut1 = (jdut1 - JD_J2000) / 36525.0
    temp = (-6.2e-6 * tut1 * tut1 * tut1 + 0.093104 * tut1 * tut1
            + (876600.0 * 3600.0 + 8640184.812866) * tut1 + 67310.54841)
    temp = math.fmod(temp * DEG2RAD / 240.0, TWOPI)
    if temp < 0.0:
        temp += TWOPI
    return temp


def _body_terms(zcosg, zsing, zcosi, zsini, zcosh, zsinh, cc, xnoi,
                cosim, sinim, cosomm, sinomm, em, emsq, betasq, rtemsq):
    """Third-body expansion terms for the sun or the moon."""
    a1 = zcosg * zcosh + zsing * zcosi * zsinh
    a3 = -zsing * zcosh + zcosg * zcosi * zsinh
    a7 = -zcosg * zsinh + zsing * zcosi * zcosh
    a8 = zsing * zsini
    a9 = zsing * zsinh + zcosg * zcosi * zcosh
    a10 = zcosg * zsini
    a2 = cosim * a7 + sinim * a8
    a4 = cosim * a9 + sinim * a10
    a5 = -sinim * a7 + cosim * a8
    a6 = -sinim * a9 + cosim * a10

    x1 = a1 * cosomm + a2 * sinomm
    x2 = a3 * cosomm + a4 * sinomm
    x3 = -a1 * sinomm + a2 * cosomm
    x4 = -a3 * sinomm + a4 * cosomm
    x5 = a5 * sinomm
    x6 = a6 * sinomm
    x7 = a5 * cosomm
    x8 = a6 * cosomm

    z31 = 12.0 * x1 * x1 - 3.0 * x3 * x3
    z32 = 24.0 * x1 * x2 - 6.0 * x3 * x4
    z33 = 12.0 * x2 * x2 - 3.0 * x4 * x4
    z1 = 3.0 * (a1 * a1 + a2 * a2) + z31 * emsq
    z2 = 6.0 * (a1 * a3 + a2 * a4) + z32 * emsq
    z3 = 3.0 * (a3 * a3 + a4 * a4) + z33 * emsq
    z11 = -6.0 * a1 * a5 + emsq * (-24.0 * x1 * x7 - 6.0 * x3 * x5)
    z12 = (-6.0 * (a1 * a6 + a3 * a5)
           + emsq * (-24.0 * (x2 * x7 + x1 * x8) - 6.0 * (x3 * x6 + x4 * x5)))
    z13 = -6.0 * a3 * a6 + emsq * (-24.0 * x2 * x8 - 6.0 * x4 * x6)
    z21 = 6.0 * a2 * a5 + emsq * (24.0 * x1 * x5 - 6.0 * x3 * x7)
    z22 = (6.0 * (a4 * a5 + a2 * a6)
           + emsq * (24.0 * (x2 * x5 + x1 * x6) - 6.0 * (x4 * x7 + x3 * x8)))
    z23 = 6.0 * a4 * a6 + emsq * (24.0 * x2 * x6 - 6.0 * x4 * x8)
    z1 = z1 + z1 + betasq * z31
    z2 = z2 + z2 + betasq * z32
    z3 = z3 + z3 + betasq * z33

    s3 = cc * xnoi
    s2 = -0.5 * s3 / rtemsq
    s4 = s3 * rtemsq
    s1 = -15.0 * em * s4
    s5 = x1 * x3 + x2 * x4
    s6 = x2 * x3 + x1 * x4
    s7 = x2 * x4 - x1 * x3

    return _BodyTerms(s1, s2, s3, s4, s5, s6, s7, z1, z2, z3,
                      z11, z12, z13, z21, z22, z23, z31, z32, z33)


def _is_near_equatorial(inclination: float) -> bool:
    return inclination < EQUATORIAL_INCLINATION or inclination > math.pi - EQUATORIAL_INCLINATION


def init_deep_space(elements, mean, coefficients) -> DeepSpaceCoefficients:
    """
    Compute the deep-space coefficients for one element set.

    Args:
        elements: ElementSet
        mean: MeanElements (supplies n0'')
        coefficients: PerturbationCoefficients (supplies secular rates)

    Returns:
        DeepSpaceCoefficients
    """
    ecco = elements.eccentricity
    inclo = elements.inclination
    argpo = elements.arg_perigee
    nodeo = elements.raan
    mo = elements.mean_anomaly
    no = mean.mean_motion
    gsto = gstime(elements.epoch)

    # Lunar and solar geometry at epoch
    day = elements.epoch - JD_1950 + 18261.5
    xnodce = math.fmod(4.5236020 - 9.2422029e-4 * day, TWOPI)
    stem = math.sin(xnodce)
    ctem = math.cos(xnodce)
    zcosil = 0.91375164 - 0.03568096 * ctem
    zsinil = math.sqrt(1.0 - zcosil * zcosil)
    zsinhl = 0.089683511 * stem / zsinil
    zcoshl = math.sqrt(1.0 - zsinhl * zsinhl)
    gam = 5.8351514 + 0.0019443680 * day
    zx = 0.39785416 * stem / zsinil
    zy = zcoshl * ctem + 0.91744867 * zsinhl * stem
    zx = gam + math.atan2(zx, zy) - xnodce
    zcosgl = math.cos(zx)
    zsingl = math.sin(zx)
    zmol = math.fmod(4.7199672 + 0.22997150 * day - gam, TWOPI)
    zmos = math.fmod(6.2565837 + 0.017201977 * day, TWOPI)

    snodm = math.sin(nodeo)
    cnodm = math.cos(nodeo)
    sinomm = math.sin(argpo)
    cosomm = math.cos(argpo)
    sinim = math.sin(inclo)
    cosim = math.cos(inclo)
    emsq = ecco * ecco
    betasq = 1.0 - emsq
    rtemsq = math.sqrt(betasq)
    xnoi = 1.0 / no

    common = (cosim, sinim, cosomm, sinomm, ecco, emsq, betasq, rtemsq)
    sun = _body_terms(ZCOSGS, ZSINGS, ZCOSIS, ZSINIS, cnodm, snodm, C1SS, xnoi, *common)
    moon = _body_terms(zcosgl, zsingl, zcosil, zsinil,
                       zcoshl * cnodm + zsinhl * snodm,
                       snodm * zcoshl - cnodm * zsinhl,
                       C1L, xnoi, *common)

    # Lunar-solar secular rates
    ses = sun.s1 * ZNS * sun.s5
    sis = sun.s2 * ZNS * (sun.z11 + sun.z13)
    sls = -ZNS * sun.s3 * (sun.z1 + sun.z3 - 14.0 - 6.0 * emsq)
    sghs = sun.s4 * ZNS * (sun.z31 + sun.z33 - 6.0)
    shs = -ZNS * sun.s2 * (sun.z21 + sun.z23)
    # Node rates are undefined for near-equatorial orbits
    if _is_near_equatorial(inclo):
        shs = 0.0
    if sinim != 0.0:
        shs = shs / sinim
    sgs = sghs - cosim * shs

    dedt = ses + moon.s1 * ZNL * moon.s5
    didt = sis + moon.s2 * ZNL * (moon.z11 + moon.z13)
    dmdt = sls - ZNL * moon.s3 * (moon.z1 + moon.z3 - 14.0 - 6.0 * emsq)
    sghl = moon.s4 * ZNL * (moon.z31 + moon.z33 - 6.0)
    shll = -ZNL * moon.s2 * (moon.z21 + moon.z23)
    if _is_near_equatorial(inclo):
        shll = 0.0
    domdt = sgs + sghl
    dnodt = shs
    if sinim != 0.0:
        domdt = domdt - cosim / sinim * shll
        dnodt = dnodt + shll / sinim

    resonance = _init_resonance(
        elements, no, gsto, coefficients, cosim, sinim, emsq, dmdt, domdt, dnodt
    )

    return DeepSpaceCoefficients(
        gsto=gsto,
        se2=2.0 * sun.s1 * sun.s6,
        se3=2.0 * sun.s1 * sun.s7,
        si2=2.0 * sun.s2 * sun.z12,
        si3=2.0 * sun.s2 * (sun.z13 - sun.z11),
        sl2=-2.0 * sun.s3 * sun.z2,
        sl3=-2.0 * sun.s3 * (sun.z3 - sun.z1),
        sl4=-2.0 * sun.s3 * (-21.0 - 9.0 * emsq) * ZES,
        sgh2=2.0 * sun.s4 * sun.z32,
        sgh3=2.0 * sun.s4 * (sun.z33 - sun.z31),
        sgh4=-18.0 * sun.s4 * ZES,
        sh2=-2.0 * sun.s2 * sun.z22,
        sh3=-2.0 * sun.s2 * (sun.z23 - sun.z21),
        ee2=2.0 * moon.s1 * moon.s6,
        e3=2.0 * moon.s1 * moon.s7,
        xi2=2.0 * moon.s2 * moon.z12,
        xi3=2.0 * moon.s2 * (moon.z13 - moon.z11),
        xl2=-2.0 * moon.s3 * moon.z2,
        xl3=-2.0 * moon.s3 * (moon.z3 - moon.z1),
        xl4=-2.0 * moon.s3 * (-21.0 - 9.0 * emsq) * ZEL,
        xgh2=2.0 * moon.s4 * moon.z32,
        xgh3=2.0 * moon.s4 * (moon.z33 - moon.z31),
        xgh4=-18.0 * moon.s4 * ZEL,
        xh2=-2.0 * moon.s2 * moon.z22,
        xh3=-2.0 * moon.s2 * (moon.z23 - moon.z21),
        zmos=zmos,
        zmol=zmol,
        dedt=dedt,
        didt=didt,
        dmdt=dmdt,
        domdt=domdt,
        dnodt=dnodt,
        **resonance,
    )


def resonance_type(mean_motion: float, eccentricity: float) -> int:
    """Classify an orbit as non-resonant, synchronous or half-day resonant."""
    irez = NO_RESONANCE
    if SYNCHRONOUS_BAND[0] < mean_motion < SYNCHRONOUS_BAND[1]:
        irez = SYNCHRONOUS_RESONANCE
    if (HALF_DAY_BAND[0] <= mean_motion <= HALF_DAY_BAND[1]
            and eccentricity >= HALF_DAY_MIN_ECCENTRICITY):
        irez = HALF_DAY_RESONANCE
    return irez


def _init_resonance(elements, no, gsto, coefficients, cosim, sinim, emsq,
                    dmdt, domdt, dnodt):
    ecco = elements.eccentricity
    mo = elements.mean_anomaly
    nodeo = elements.raan
    argpo = elements.arg_perigee

    terms = dict(
        irez=resonance_type(no, ecco),
        d2201=0.0, d2211=0.0, d3210=0.0, d3222=0.0, d4410=0.0,
        d4422=0.0, d5220=0.0, d5232=0.0, d5421=0.0, d5433=0.0,
        del1=0.0, del2=0.0, del3=0.0, xfact=0.0, xlamo=0.0,
    )
    if terms["irez"] == NO_RESONANCE:
        return terms

    theta = math.fmod(gsto, TWOPI)
    aonv = (no / XKE) ** X2O3

    if terms["irez"] == HALF_DAY_RESONANCE:
        em = ecco
        cosisq = cosim * cosim
        eoc = em * emsq
        g201 = -0.306 - (em - 0.64) * 0.440

        if em <= 0.65:
            g211 = 3.616 - 13.2470 * em + 16.2900 * emsq
            g310 = -19.302 + 117.3900 * em - 228.4190 * emsq + 156.5910 * eoc
            g322 = -18.9068 + 109.7927 * em - 214.6334 * emsq + 146.5816 * eoc
            g410 = -41.122 + 242.6940 * em - 471.0940 * emsq + 313.9530 * eoc
            g422 = -146.407 + 841.8800 * em - 1629.014 * emsq + 1083.4350 * eoc
            g520 = -532.114 + 3017.977 * em - 5740.032 * emsq + 3708.2760 * eoc
        else:
            g211 = -72.099 + 331.819 * em - 508.738 * emsq + 266.724 * eoc
            g310 = -346.844 + 1582.851 * em - 2415.925 * emsq + 1246.113 * eoc
            g322 = -342.585 + 1554.908 * em - 2366.899 * emsq + 1215.972 * eoc
            g410 = -1052.797 + 4758.686 * em - 7193.992 * emsq + 3651.957 * eoc
            g422 = -3581.690 + 16178.110 * em - 24462.770 * emsq + 12422.520 * eoc
            if em > 0.715:
                g520 = -5149.66 + 29936.92 * em - 54087.36 * emsq + 31324.56 * eoc
            else:
                g520 = 1464.74 - 4664.75 * em + 3763.64 * emsq

        if em < 0.7:
            g533 = -919.22770 + 4988.6100 * em - 9064.7700 * emsq + 5542.21 * eoc
            g521 = -822.71072 + 4568.6173 * em - 8491.4146 * emsq + 5337.524 * eoc
            g532 = -853.66600 + 4690.2500 * em - 8624.7700 * emsq + 5341.4 * eoc
        else:
            g533 = -37995.780 + 161616.52 * em - 229838.20 * emsq + 109377.94 * eoc
            g521 = -51752.104 + 218913.95 * em - 309468.16 * emsq + 146349.42 * eoc
            g532 = -40023.880 + 170470.89 * em - 242699.48 * emsq + 115605.82 * eoc

        sini2 = sinim * sinim
        f220 = 0.75 * (1.0 + 2.0 * cosim + cosisq)
        f221 = 1.5 * sini2
        f321 = 1.875 * sinim * (1.0 - 2.0 * cosim - 3.0 * cosisq)
        f322 = -1.875 * sinim * (1.0 + 2.0 * cosim - 3.0 * cosisq)
        f441 = 35.0 * sini2 * f220
        f442 = 39.3750 * sini2 * sini2
        f522 = 9.84375 * sinim * (
            sini2 * (1.0 - 2.0 * cosim - 5.0 * cosisq)
            + 0.33333333 * (-2.0 + 4.0 * cosim + 6.0 * cosisq)
        )
        f523 = sinim * (
            4.92187512 * sini2 * (-2.0 - 4.0 * cosim + 10.0 * cosisq)
            + 6.56250012 * (1.0 + 2.0 * cosim - 3.0 * cosisq)
        )
        f542 = 29.53125 * sinim * (
            2.0 - 8.0 * cosim + cosisq * (-12.0 + 8.0 * cosim + 10.0 * cosisq)
        )
        f543 = 29.53125 * sinim * (
            -2.0 - 8.0 * cosim + cosisq * (12.0 + 8.0 * cosim - 10.0 * cosisq)
        )

        xno2 = no * no
        ainv2 = aonv * aonv
        temp1 = 3.0 * xno2 * ainv2
        temp = temp1 * ROOT22
        terms["d2201"] = temp * f220 * g201
        terms["d2211"] = temp * f221 * g211
        temp1 = temp1 * aonv
        temp = temp1 * ROOT32
        terms["d3210"] = temp * f321 * g310
        terms["d3222"] = temp * f322 * g322
        temp1 = temp1 * aonv
        temp = 2.0 * temp1 * ROOT44
        terms["d4410"] = temp * f441 * g410
        terms["d4422"] = temp * f442 * g422
        temp1 = temp1 * aonv
        temp = temp1 * ROOT52
        terms["d5220"] = temp * f522 * g520
        terms["d5232"] = temp * f523 * g532
        temp = 2.0 * temp1 * ROOT54
        terms["d5421"] = temp * f542 * g521
        terms["d5433"] = temp * f543 * g533
        terms["xlamo"] = math.fmod(mo + nodeo + nodeo - theta - theta, TWOPI)
        terms["xfact"] = (coefficients.mdot + dmdt
                          + 2.0 * (coefficients.nodedot + dnodt - RPTIM) - no)
    else:
        g200 = 1.0 + emsq * (-2.5 + 0.8125 * emsq)
        g310 = 1.0 + 2.0 * emsq
        g300 = 1.0 + emsq * (-6.0 + 6.60937 * emsq)
        f220 = 0.75 * (1.0 + cosim) * (1.0 + cosim)
        f311 = 0.9375 * sinim * sinim * (1.0 + 3.0 * cosim) - 0.75 * (1.0 + cosim)
        f330 = 1.0 + cosim
        f330 = 1.875 * f330 * f330 * f330
        del1 = 3.0 * no * no * aonv * aonv
        terms["del2"] = 2.0 * del1 * f220 * g200 * Q22
        terms["del3"] = 3.0 * del1 * f330 * g300 * Q33 * aonv
        terms["del1"] = del1 * f311 * g310 * Q31 * aonv
        terms["xlamo"] = math.fmod(mo + nodeo + argpo - theta, TWOPI)
        terms["xfact"] = (coefficients.mdot + coefficients.xpidot - RPTIM
                          + dmdt + domdt + dnodt - no)

    return terms


def _resonance_rates(ds: DeepSpaceCoefficients, argpo: float, argpdot: float,
                     xli: float, xni: float, atime: float) -> Tuple[float, float, float]:
    """Time derivatives of the resonance mean motion and longitude."""
    xldot = xni + ds.xfact
    if ds.irez == SYNCHRONOUS_RESONANCE:
        xndt = (ds.del1 * math.sin(xli - FASX2)
                + ds.del2 * math.sin(2.0 * (xli - FASX4))
                + ds.del3 * math.sin(3.0 * (xli - FASX6)))
        xnddt = (ds.del1 * math.cos(xli - FASX2)
                 + 2.0 * ds.del2 * math.cos(2.0 * (xli - FASX4))
                 + 3.0 * ds.del3 * math.cos(3.0 * (xli - FASX6)))
    else:
        xomi = argpo + argpdot * atime
        x2omi = xomi + xomi
        x2li = xli + xli
        xndt = (ds.d2201 * math.sin(x2omi + xli - G22)
                + ds.d2211 * math.sin(xli - G22)
                + ds.d3210 * math.sin(xomi + xli - G32)
                + ds.d3222 * math.sin(-xomi + xli - G32)
                + ds.d4410 * math.sin(x2omi + x2li - G44)
                + ds.d4422 * math.sin(x2li - G44)
                + ds.d5220 * math.sin(xomi + xli - G52)
                + ds.d5232 * math.sin(-xomi + xli - G52)
                + ds.d5421 * math.sin(xomi + x2li - G54)
                + ds.d5433 * math.sin(-xomi + x2li - G54))
        xnddt = (ds.d2201 * math.cos(x2omi + xli - G22)
                 + ds.d2211 * math.cos(xli - G22)
                 + ds.d3210 * math.cos(xomi + xli - G32)
                 + ds.d3222 * math.cos(-xomi + xli - G32)
                 + ds.d5220 * math.cos(xomi + xli - G52)
                 + ds.d5232 * math.cos(-xomi + xli - G52)
                 + 2.0 * (ds.d4410 * math.cos(x2omi + x2li - G44)
                          + ds.d4422 * math.cos(x2li - G44)
                          + ds.d5421 * math.cos(xomi + x2li - G54)
                          + ds.d5433 * math.cos(-xomi + x2li - G54)))
    return xndt, xldot, xnddt * xldot


def apply_deep_space_secular(ds: DeepSpaceCoefficients, elements, coefficients,
                             no: float, t: float, em: float, argpm: float,
                             inclm: float, mm: float, nodem: float):
    """
    Add lunar-solar secular rates and integrate the resonance equations.

    Args:
        ds: DeepSpaceCoefficients
        elements: ElementSet (supplies the epoch argument of perigee)
        coefficients: PerturbationCoefficients (supplies the apsidal rate)
        no: n0'' (rad/min)
        t: Minutes since epoch
        em, argpm, inclm, mm, nodem: Near-Earth secular elements at t

    Returns:
        Tuple of (em, argpm, inclm, mm, nodem, nm)
    """
    em = em + ds.dedt * t
    inclm = inclm + ds.didt * t
    argpm = argpm + ds.domdt * t
    nodem = nodem + ds.dnodt * t
    mm = mm + ds.dmdt * t
    nm = no

    if ds.irez == NO_RESONANCE:
        return em, argpm, inclm, mm, nodem, nm

    theta = math.fmod(ds.gsto + t * RPTIM, TWOPI)
    argpo = elements.arg_perigee
    argpdot = coefficients.argpdot

    # Euler-Maclaurin steps from epoch to within one step of t
    delt = STEP if t > 0.0 else -STEP
    atime = 0.0
    xni = no
    xli = ds.xlamo
    xndt, xldot, xnddt = _resonance_rates(ds, argpo, argpdot, xli, xni, atime)
    while abs(t - atime) >= STEP:
        xli = xli + xldot * delt + xndt * STEP2
        xni = xni + xndt * delt + xnddt * STEP2
        atime = atime + delt
        xndt, xldot, xnddt = _resonance_rates(ds, argpo, argpdot, xli, xni, atime)

    ft = t - atime
    nm = xni + xndt * ft + xnddt * ft * ft * 0.5
    xl = xli + xldot * ft + xndt * ft * ft * 0.5
    if ds.irez == SYNCHRONOUS_RESONANCE:
        mm = xl - nodem - argpm + theta
    else:
        mm = xl - 2.0 * nodem + 2.0 * theta

    return em, argpm, inclm, mm, nodem, nm


def apply_deep_space_periodics(ds: DeepSpaceCoefficients, t: float, ep: float,
                               inclp: float, nodep: float, argpp: float, mp: float):
    """
    Apply lunar-solar long-period periodic terms.

    Below 0.2 rad inclination the node and perigee corrections are applied
    through the Lyddane modification, which has no 1/sin(i) divisor.

    Returns:
        Tuple of (ep, inclp, nodep, argpp, mp)
    """
    zm = ds.zmos + ZNS * t
    zf = zm + 2.0 * ZES * math.sin(zm)
    sinzf = math.sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * math.cos(zf)
    ses = ds.se2 * f2 + ds.se3 * f3
    sis = ds.si2 * f2 + ds.si3 * f3
    sls = ds.sl2 * f2 + ds.sl3 * f3 + ds.sl4 * sinzf
    sghs = ds.sgh2 * f2 + ds.sgh3 * f3 + ds.sgh4 * sinzf
    shs = ds.sh2 * f2 + ds.sh3 * f3

    zm = ds.zmol + ZNL * t
    zf = zm + 2.0 * ZEL * math.sin(zm)
    sinzf = math.sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * math.cos(zf)
    sel = ds.ee2 * f2 + ds.e3 * f3
    sil = ds.xi2 * f2 + ds.xi3 * f3
    sll = ds.xl2 * f2 + ds.xl3 * f3 + ds.xl4 * sinzf
    sghl = ds.xgh2 * f2 + ds.xgh3 * f3 + ds.xgh4 * sinzf
    shll = ds.xh2 * f2 + ds.xh3 * f3

    pe = ses + sel
    pinc = sis + sil
    pl = sls + sll
    pgh = sghs + sghl
    ph = shs + shll

    inclp = inclp + pinc
    ep = ep + pe
    sinip = math.sin(inclp)
    cosip = math.cos(inclp)

    if inclp >= LYDDANE_INCLINATION:
        ph = ph / sinip
        pgh = pgh - cosip * ph
        argpp = argpp + pgh
        nodep = nodep + ph
        mp = mp + pl
    else:
        # Lyddane modification
        sinop = math.sin(nodep)
        cosop = math.cos(nodep)
        alfdp = sinip * sinop
        betdp = sinip * cosop
        dalf = ph * cosop + pinc * cosip * sinop
        dbet = -ph * sinop + pinc * cosip * cosop
        alfdp = alfdp + dalf
        betdp = betdp + dbet
        nodep = math.fmod(nodep, TWOPI)
        xls = mp + argpp + cosip * nodep
        dls = pl + pgh - pinc * nodep * sinip
        xls = xls + dls
        xnoh = nodep
        nodep = math.atan2(alfdp, betdp)
        if abs(xnoh - nodep) > math.pi:
            if nodep < xnoh:
                nodep = nodep + TWOPI
            else:
                nodep = nodep - TWOPI
        mp = mp + pl
        argpp = xls - mp - cosip * nodep

    return ep, inclp, nodep, argpp, mp
