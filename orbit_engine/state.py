"""
State Reconstructor

Rotates the corrected radius and velocity components into the TEME frame and
scales them to kilometers and kilometers per second.
"""

import math
from typing import Any, Dict, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict

from orbit_engine.constants import EARTH_RADIUS_KM, VKMPERSEC
from orbit_engine.errors import NumericalInstabilityError
from orbit_engine.periodics import CorrectedElements


class State(BaseModel):
    """
    Cartesian state in the TEME frame.

    Attributes:
        position: Position (km)
        velocity: Velocity (km/s)
        tsince: Minutes since epoch
    """

    model_config = ConfigDict(frozen=True)

    position: Tuple[float, float, float]
    velocity: Tuple[float, float, float]
    tsince: float = 0.0

    @property
    def r(self) -> np.ndarray:
        return np.array(self.position)

    @property
    def v(self) -> np.ndarray:
        return np.array(self.velocity)

    @property
    def radius_km(self) -> float:
        return float(np.linalg.norm(self.r))

    @property
    def speed_kms(self) -> float:
        return float(np.linalg.norm(self.v))

    @property
    def altitude_km(self) -> float:
        """Height above the reference sphere (not geodetic altitude)."""
        return self.radius_km - EARTH_RADIUS_KM

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tsince_minutes": self.tsince,
            "position_km": list(self.position),
            "velocity_kms": list(self.velocity),
            "radius_km": self.radius_km,
            "speed_kms": self.speed_kms,
        }


def rotation_matrix(raan: float, inclination: float, arg_latitude: float) -> np.ndarray:
    """
    Rotation from the orbital frame (x toward the satellite) to TEME.

    Args:
        raan: Right ascension of ascending node (rad)
        inclination: Inclination (rad)
        arg_latitude: Argument of latitude (rad)

    Returns:
        3x3 rotation matrix Rz(raan) @ Rx(inclination) @ Rz(arg_latitude)
    """
    cos_raan = math.cos(raan)
    sin_raan = math.sin(raan)
    cos_i = math.cos(inclination)
    sin_i = math.sin(inclination)
    cos_u = math.cos(arg_latitude)
    sin_u = math.sin(arg_latitude)

    R_raan = np.array([
        [cos_raan, -sin_raan, 0.0],
        [sin_raan, cos_raan, 0.0],
        [0.0, 0.0, 1.0]
    ])

    R_i = np.array([
        [1.0, 0.0, 0.0],
        [0.0, cos_i, -sin_i],
        [0.0, sin_i, cos_i]
    ])

    R_u = np.array([
        [cos_u, -sin_u, 0.0],
        [sin_u, cos_u, 0.0],
        [0.0, 0.0, 1.0]
    ])

    return R_raan @ R_i @ R_u


def reconstruct_state(corrected: CorrectedElements) -> State:
    """
    Build the TEME state vector from the corrected elements.

    Args:
        corrected: Short-period corrected radius, angles and velocity components

    Returns:
        State in km and km/s

    Raises:
        NumericalInstabilityError: If any component is not finite
    """
    R = rotation_matrix(corrected.raan, corrected.inclination, corrected.arg_latitude)

    # Radial and transverse components in the orbital frame
    r_orbit = np.array([corrected.radius, 0.0, 0.0])
    v_orbit = np.array([corrected.radial_velocity, corrected.transverse_velocity, 0.0])

    position = (R @ r_orbit) * EARTH_RADIUS_KM
    velocity = (R @ v_orbit) * VKMPERSEC

    if not (np.all(np.isfinite(position)) and np.all(np.isfinite(velocity))):
        raise NumericalInstabilityError(
            f"Non-finite state at t = {corrected.tsince} min: "
            f"r = {position.tolist()}, v = {velocity.tolist()}",
            tsince=corrected.tsince,
        )

    return State(
        position=tuple(float(x) for x in position),
        velocity=tuple(float(x) for x in velocity),
        tsince=corrected.tsince,
    )
