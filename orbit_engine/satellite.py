"""
Satellite Record

Ties the engine together. A Satellite computes its refined mean elements and
perturbation coefficients once, at construction, and then answers any number
of propagate(t) calls from that cache.

State machine:
    INITIALIZED -> INITIALIZED  on every successful propagation
    INITIALIZED -> DECAYED      when the integrator detects re-entry
    INITIALIZED -> ERROR        on a numerical singularity

DECAYED and ERROR are permanent: later calls re-raise the stored error without
recomputing anything. The cached coefficients are immutable, so concurrent
propagate() calls need no locking; only the one-way status change is guarded.
"""

import logging
import threading
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np

from orbit_engine.coefficients import PerturbationCoefficients, build_coefficients
from orbit_engine.constants import EARTH_RADIUS_KM
from orbit_engine.deep_space import DeepSpaceCoefficients, init_deep_space
from orbit_engine.elements import ElementSet
from orbit_engine.errors import (
    NumericalInstabilityError,
    OrbitDecayedError,
    PropagationError,
)
from orbit_engine.kepler import solve_kepler_equation
from orbit_engine.mean_elements import MeanElements, derive_mean_elements
from orbit_engine.periodics import (
    PropagatedElements,
    apply_long_period,
    apply_short_period,
)
from orbit_engine.secular import integrate_secular
from orbit_engine.state import State, reconstruct_state

logger = logging.getLogger(__name__)


class SatelliteStatus(str, Enum):
    INITIALIZED = "initialized"
    DECAYED = "decayed"
    ERROR = "error"


class Satellite:
    """
    SGP4/SDP4 propagator for a single element set.

    Args:
        elements: Validated element set

    Raises:
        InvalidElementError: If the element set describes a degenerate orbit

    Attributes:
        elements: Input element set
        mean_elements: Refined mean elements and regime flags
        coefficients: Perturbation coefficients (None if initialization failed)
        deep_space: Deep-space coefficients, or None for near-Earth orbits
        status: Current SatelliteStatus
        error: Stored error once DECAYED or ERROR
    """

    def __init__(self, elements: ElementSet):
        self.elements = elements
        self.status = SatelliteStatus.INITIALIZED
        self.error: Optional[PropagationError] = None
        self._lock = threading.Lock()

        self.mean_elements: MeanElements = derive_mean_elements(elements)
        self.coefficients: Optional[PerturbationCoefficients] = None
        self.deep_space: Optional[DeepSpaceCoefficients] = None

        try:
            self.coefficients = build_coefficients(elements, self.mean_elements)
            if self.mean_elements.is_deep_space:
                self.deep_space = init_deep_space(elements, self.mean_elements, self.coefficients)
        except NumericalInstabilityError as e:
            self._fail(SatelliteStatus.ERROR, e)
        except ArithmeticError as e:
            error = NumericalInstabilityError(f"Arithmetic failure at initialization: {e}")
            self._fail(SatelliteStatus.ERROR, error)

    @classmethod
    def from_tle(cls, line1: str, line2: str, name: str = "") -> "Satellite":
        """Create a satellite record from two-line element text."""
        return cls(ElementSet.from_tle(line1, line2, name))

    @property
    def method(self) -> str:
        """'d' for deep-space (SDP4), 'n' for near-Earth (SGP4)."""
        return "d" if self.mean_elements.is_deep_space else "n"

    def propagate(self, tsince: float) -> State:
        """
        Propagate to a time offset from epoch.

        Args:
            tsince: Minutes since epoch (may be negative)

        Returns:
            State with TEME position (km) and velocity (km/s)

        Raises:
            OrbitDecayedError: If the orbit has decayed (now or earlier)
            NumericalInstabilityError: On a numerical singularity (now or earlier)
            ConvergenceFailureError: If Kepler's equation does not converge
        """
        _, state = self._run(tsince)
        return state

    def elements_at(self, tsince: float) -> PropagatedElements:
        """Time-advanced orbital elements at a time offset from epoch."""
        propagated, _ = self._run(tsince)
        return propagated

    def propagate_many(self, times: Iterable[float]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Propagate to several time offsets.

        Args:
            times: Minutes since epoch

        Returns:
            Tuple of (positions, velocities), each an (N, 3) array

        Raises:
            PropagationError: On the first failing time
        """
        states = [self.propagate(t) for t in times]
        positions = np.array([s.position for s in states]).reshape(-1, 3)
        velocities = np.array([s.velocity for s in states]).reshape(-1, 3)
        return positions, velocities

    def get_orbital_elements(self) -> Dict[str, Any]:
        """Get orbital elements with the derived regime information."""
        mean = self.mean_elements
        result = self.elements.to_dict()
        result.update({
            "method": self.method,
            "status": self.status.value,
            "semi_major_axis_km": mean.semi_major_axis * EARTH_RADIUS_KM,
            "perigee_km": mean.perigee_km,
            "apogee_km": mean.apogee_km,
            "period_minutes": mean.period_minutes,
            "simplified_drag": mean.uses_simplified_drag,
        })
        if self.deep_space is not None:
            result["resonance"] = self.deep_space.irez
        return result

    def _run(self, tsince: float):
        if self.error is not None:
            raise self.error.with_traceback(None)

        try:
            secular = integrate_secular(
                self.elements, self.mean_elements, self.coefficients, self.deep_space, tsince
            )
            long_period = apply_long_period(secular, self.coefficients, self.deep_space is not None)
            eo1 = solve_kepler_equation(long_period.u, long_period.axn, long_period.ayn)
            corrected, propagated = apply_short_period(secular, long_period, eo1)
            state = reconstruct_state(corrected)
        except OrbitDecayedError as e:
            self._fail(SatelliteStatus.DECAYED, e)
            raise
        except NumericalInstabilityError as e:
            self._fail(SatelliteStatus.ERROR, e)
            raise
        except PropagationError:
            raise
        except (ArithmeticError, ValueError) as e:
            error = NumericalInstabilityError(f"Arithmetic failure at t = {tsince} min: {e}", tsince=tsince)
            self._fail(SatelliteStatus.ERROR, error)
            raise error from e

        return propagated, state

    def _fail(self, status: SatelliteStatus, error: PropagationError) -> None:
        with self._lock:
            if self.error is not None:
                return
            self.status = status
            self.error = error

        if status is SatelliteStatus.DECAYED:
            logger.warning(f"Satellite {self.elements.satnum} has decayed: {error}")
        else:
            logger.error(f"Satellite {self.elements.satnum} entered error state: {error}")

    def __repr__(self) -> str:
        return (
            f"Satellite(satnum={self.elements.satnum}, method={self.method!r}, "
            f"status={self.status.value!r})"
        )


def propagate(elements: ElementSet, tsince: float) -> State:
    """
    Propagate an element set to a time offset from its epoch.

    Args:
        elements: Element set
        tsince: Minutes since epoch (may be negative)

    Returns:
        State with TEME position (km) and velocity (km/s)
    """
    return Satellite(elements).propagate(tsince)
