"""
Propagation Errors

Typed errors raised by the propagation engine. None of them is recovered
inside the engine: each one reaches the caller with a numeric code and a
physical interpretation, in the same spirit as the SGP4 error codes of
Vallado et al. (2006).
"""

from typing import Any, Dict, Optional


# Error code meanings
ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < -0.001 or >= 1.0",
    2: "Mean motion <= 0.0",
    3: "Perturbed eccentricity < 0.0 or >= 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Drag has collapsed the semi-major axis",
    6: "Satellite has decayed (radius below Earth surface)",
    7: "Numerical instability",
    8: "Kepler solver did not converge",
    9: "Invalid input element",
}

_PHYSICAL_MEANING = {
    1: (
        "The drag-perturbed mean eccentricity left the range [0, 1). "
        "The orbit is no longer bound or the drag term is far too large."
    ),
    2: (
        "The resonance-integrated mean motion is not positive, which is "
        "physically impossible for a bound orbit."
    ),
    3: (
        "Lunar-solar periodic terms pushed the eccentricity outside [0, 1). "
        "This typically occurs when propagating far from the element epoch."
    ),
    4: (
        "The semi-latus rectum is negative, so the osculating orbit is "
        "unphysical."
    ),
    5: (
        "The drag polynomial has driven the semi-major axis to zero. "
        "The satellite has re-entered the atmosphere."
    ),
    6: (
        "The computed orbital radius is below the Earth's surface. "
        "The satellite has re-entered the atmosphere."
    ),
    7: (
        "A divisor in the perturbation series reached zero (for example "
        "|eta| >= 1) or a result was not finite. The element set is unphysical."
    ),
    8: (
        "Kepler's equation did not converge within the iteration bound. "
        "This signals a numerical error upstream of the solver."
    ),
    9: (
        "An input element is outside its physical range (eccentricity, "
        "inclination, mean motion) or is not a finite number."
    ),
}

_RECOMMENDED_ACTION = {
    1: "Obtain fresh elements for this satellite or shorten the propagation span.",
    2: "Verify element integrity and obtain updated elements.",
    3: "Use more recent elements or limit propagation to shorter time periods.",
    4: "Use more recent elements or limit propagation to shorter time periods.",
    5: "The satellite has decayed. Historical propagation only.",
    6: "The satellite has decayed. Historical propagation only.",
    7: "Check the element set for corrupted values.",
    8: "Check the element set for corrupted values.",
    9: "Correct the element set before constructing a satellite record.",
}


class PropagationError(RuntimeError):
    """
    Base class for all propagation engine errors.

    Attributes:
        code: Numeric error code (see ERROR_CODES)
        tsince: Elapsed minutes since epoch at which the failure occurred,
            or None for failures during initialization
    """

    default_code = 7

    def __init__(self, message: str, code: Optional[int] = None,
                 tsince: Optional[float] = None):
        super().__init__(message)
        self.code = self.default_code if code is None else code
        self.tsince = tsince

    @property
    def description(self) -> str:
        return ERROR_CODES.get(self.code, f"Unknown error {self.code}")

    def diagnostics(self) -> Dict[str, Any]:
        """
        Get detailed physical diagnostics for the error.

        Returns:
            Dictionary with error code, description, physical meaning and
            recommended action
        """
        diagnostics = {
            "error_type": type(self).__name__,
            "error_code": self.code,
            "error_description": self.description,
            "message": str(self),
            "physical_meaning": _PHYSICAL_MEANING.get(self.code, ""),
            "recommended_action": _RECOMMENDED_ACTION.get(self.code, ""),
        }
        if self.tsince is not None:
            diagnostics["tsince_minutes"] = self.tsince
        return diagnostics


class InvalidElementError(PropagationError, ValueError):
    """Input elements are outside their physical range."""

    default_code = 9


class NumericalInstabilityError(PropagationError):
    """A computed divisor reached zero or a result was not finite."""

    default_code = 7


class ConvergenceFailureError(PropagationError):
    """Kepler's equation did not converge within the iteration bound."""

    default_code = 8


class OrbitDecayedError(PropagationError):
    """Secular integration implies the orbit has decayed."""

    default_code = 6
