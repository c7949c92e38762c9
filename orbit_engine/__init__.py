"""
SGP4/SDP4 Orbital Propagation Engine

This package propagates NORAD mean element sets to TEME position and velocity
with the revised SGP4/SDP4 model, including deep-space lunar-solar and
resonance perturbations.

Modules:
    elements: Immutable element set model and TLE/degree constructors
    mean_elements: Element conversion and regime selection
    coefficients: Perturbation coefficient cache
    deep_space: Lunar-solar and resonance terms (SDP4)
    secular: Secular and drag integration
    kepler: Kepler equation solvers
    periodics: Long- and short-period corrections
    state: TEME state reconstruction
    satellite: Satellite record and state machine
    errors: Typed propagation errors
    validation: Reference vector and library cross-checks

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from orbit_engine.elements import ElementSet
from orbit_engine.errors import (
    ConvergenceFailureError,
    InvalidElementError,
    NumericalInstabilityError,
    OrbitDecayedError,
    PropagationError,
)
from orbit_engine.kepler import solve_kepler
from orbit_engine.periodics import PropagatedElements
from orbit_engine.satellite import Satellite, SatelliteStatus, propagate
from orbit_engine.state import State

__version__ = "1.0.0"

__all__ = [
    "ElementSet",
    "Satellite",
    "SatelliteStatus",
    "State",
    "PropagatedElements",
    "propagate",
    "solve_kepler",
    "PropagationError",
    "InvalidElementError",
    "NumericalInstabilityError",
    "ConvergenceFailureError",
    "OrbitDecayedError",
]
