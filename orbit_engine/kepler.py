"""
Kepler Solver

Newton-Raphson solution of Kepler's equation, in the classical form used for
a single orbit and in the non-singular form SGP4 uses internally.
"""

import math

from orbit_engine.constants import (
    KEPLER_MAX_ITERATIONS,
    KEPLER_MAX_STEP,
    KEPLER_TOLERANCE,
    TWOPI,
)
from orbit_engine.errors import ConvergenceFailureError


def solve_kepler_equation(u: float, axn: float, ayn: float,
                          tolerance: float = KEPLER_TOLERANCE,
                          max_iter: int = KEPLER_MAX_ITERATIONS) -> float:
    """
    Solve the generalized Kepler equation for E + omega.

    With axn = e*cos(omega) and ayn = e*sin(omega) the equation

        u = (E + omega) - axn*sin(E + omega) + ayn*cos(E + omega)

    stays well conditioned as e goes to zero, which is why SGP4 iterates on
    E + omega rather than on E.

    Args:
        u: Mean longitude minus node, M + omega (rad)
        axn: e*cos(omega)
        ayn: e*sin(omega), including long-period terms
        tolerance: Convergence tolerance on the Newton step (rad)
        max_iter: Maximum iterations

    Returns:
        E + omega (rad)

    Raises:
        ConvergenceFailureError: If the step is still above tolerance after
            max_iter iterations
    """
    eo1 = u
    for _ in range(max_iter):
        sineo1 = math.sin(eo1)
        coseo1 = math.cos(eo1)
        tem5 = (u - ayn * coseo1 + axn * sineo1 - eo1) / (1.0 - coseo1 * axn - sineo1 * ayn)
        # Limit the first steps for highly eccentric orbits
        if abs(tem5) >= KEPLER_MAX_STEP:
            tem5 = math.copysign(KEPLER_MAX_STEP, tem5)
        eo1 = eo1 + tem5
        if abs(tem5) < tolerance:
            return eo1

    raise ConvergenceFailureError(
        f"Kepler's equation did not converge in {max_iter} iterations "
        f"(u = {u:.6f}, axn = {axn:.6e}, ayn = {ayn:.6e})"
    )


def solve_kepler(mean_anomaly: float, eccentricity: float,
                 tolerance: float = KEPLER_TOLERANCE,
                 max_iter: int = KEPLER_MAX_ITERATIONS) -> float:
    """
    Solve Kepler's equation E - e*sin(E) = M for eccentric anomaly.

    Args:
        mean_anomaly: Mean anomaly M (rad), reduced modulo 2pi
        eccentricity: Eccentricity, in [0, 1)
        tolerance: Convergence tolerance (rad)
        max_iter: Maximum iterations

    Returns:
        Eccentric anomaly E (rad)
    """
    M = mean_anomaly % TWOPI
    return solve_kepler_equation(M, eccentricity, 0.0, tolerance, max_iter)
