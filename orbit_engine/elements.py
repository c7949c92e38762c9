"""
Element Set Model

Provides the immutable input record of the propagation engine: the mean
orbital elements of one satellite at one epoch, in the units the engine works
in (radians and radians per minute).

Two-line element text is not parsed here. ElementSet.from_tle hands the lines
to the sgp4 library's parser and only reads the resulting field values.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sgp4.api import WGS72OLD, Satrec, jday

from orbit_engine.constants import JD_J2000, MINUTES_PER_DAY, TWOPI, XPDOTP
from orbit_engine.errors import InvalidElementError

J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def datetime_to_julian_date(dt: datetime) -> float:
    """
    Convert a datetime to a Julian date.

    Naive datetimes are taken to be UTC.

    Args:
        dt: Date and time

    Returns:
        Julian date (days)
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    jd, fr = jday(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                  dt.second + dt.microsecond / 1e6)
    return jd + fr


def julian_date_to_datetime(jd: float) -> datetime:
    """Convert a Julian date to a timezone-aware UTC datetime."""
    return J2000_EPOCH + timedelta(days=jd - JD_J2000)


class ElementSet(BaseModel):
    """
    Mean orbital elements of a satellite at epoch.

    Attributes:
        mean_motion: Kozai mean motion (rad/min)
        eccentricity: Eccentricity, in [0, 1)
        inclination: Inclination (rad), in [0, pi]
        raan: Right ascension of ascending node (rad)
        arg_perigee: Argument of perigee (rad)
        mean_anomaly: Mean anomaly (rad)
        bstar: Drag term (1/earth radii)
        epoch: Epoch as a Julian date (UTC)
        satnum: Catalog number
        name: Optional satellite name

    Raises:
        InvalidElementError: If any field violates its physical range or is
            not a finite number
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")

    mean_motion: float = Field(gt=0.0)
    eccentricity: float = Field(ge=0.0, lt=1.0)
    inclination: float = Field(ge=0.0, le=math.pi)
    raan: float
    arg_perigee: float
    mean_anomaly: float
    bstar: float = 0.0
    epoch: float = Field(gt=0.0)
    satnum: int = 0
    name: str = ""

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidElementError(f"Invalid element set: {e}") from e

    @classmethod
    def from_tle(cls, line1: str, line2: str, name: str = "") -> "ElementSet":
        """
        Build an element set from two-line element text.

        Args:
            line1: First line of TLE
            line2: Second line of TLE
            name: Optional satellite name

        Returns:
            ElementSet with the parsed mean elements
        """
        try:
            satellite = Satrec.twoline2rv(line1, line2, WGS72OLD)
        except (ValueError, IndexError) as e:
            raise InvalidElementError(f"Failed to parse TLE: {e}") from e

        return cls(
            mean_motion=satellite.no_kozai,
            eccentricity=satellite.ecco,
            inclination=satellite.inclo,
            raan=satellite.nodeo,
            arg_perigee=satellite.argpo,
            mean_anomaly=satellite.mo,
            bstar=satellite.bstar,
            epoch=satellite.jdsatepoch + satellite.jdsatepochF,
            satnum=satellite.satnum,
            name=name,
        )

    @classmethod
    def from_degrees(
        cls,
        mean_motion: float,
        eccentricity: float,
        inclination: float,
        raan: float,
        arg_perigee: float,
        mean_anomaly: float,
        bstar: float = 0.0,
        epoch: Union[float, datetime] = JD_J2000,
        satnum: int = 0,
        name: str = "",
    ) -> "ElementSet":
        """
        Build an element set from conventional TLE units.

        Args:
            mean_motion: Mean motion (rev/day)
            eccentricity: Eccentricity
            inclination: Inclination (degrees)
            raan: Right ascension of ascending node (degrees)
            arg_perigee: Argument of perigee (degrees)
            mean_anomaly: Mean anomaly (degrees)
            bstar: Drag term (1/earth radii)
            epoch: Julian date or datetime (naive datetimes are UTC)
            satnum: Catalog number
            name: Optional satellite name

        Returns:
            ElementSet in engine units
        """
        if isinstance(epoch, datetime):
            epoch = datetime_to_julian_date(epoch)

        return cls(
            mean_motion=mean_motion / XPDOTP,
            eccentricity=eccentricity,
            inclination=math.radians(inclination),
            raan=math.radians(raan),
            arg_perigee=math.radians(arg_perigee),
            mean_anomaly=math.radians(mean_anomaly),
            bstar=bstar,
            epoch=epoch,
            satnum=satnum,
            name=name,
        )

    @property
    def epoch_datetime(self) -> datetime:
        return julian_date_to_datetime(self.epoch)

    @property
    def mean_motion_rev_per_day(self) -> float:
        return self.mean_motion * XPDOTP

    @property
    def period_minutes(self) -> float:
        """Keplerian period from the unrefined mean motion."""
        return TWOPI / self.mean_motion

    def to_dict(self) -> Dict[str, Any]:
        """
        Export elements in conventional units.

        Returns:
            Dictionary with angles in degrees and mean motion in rev/day
        """
        return {
            "norad_id": self.satnum,
            "name": self.name,
            "epoch": self.epoch_datetime.isoformat(),
            "mean_motion": self.mean_motion_rev_per_day,
            "eccentricity": self.eccentricity,
            "inclination": math.degrees(self.inclination),
            "raan": math.degrees(self.raan),
            "arg_perigee": math.degrees(self.arg_perigee),
            "mean_anomaly": math.degrees(self.mean_anomaly),
            "bstar": self.bstar,
            "period_minutes": self.period_minutes,
            "epoch_age_days": (
                datetime.now(timezone.utc) - self.epoch_datetime
            ).total_seconds() / 86400.0,
        }

    def days_since_epoch(self, when: datetime) -> float:
        """Elapsed days from epoch to the given datetime."""
        return datetime_to_julian_date(when) - self.epoch

    def minutes_since_epoch(self, when: datetime) -> float:
        """Elapsed minutes from epoch, the time argument of propagate()."""
        return self.days_since_epoch(when) * MINUTES_PER_DAY
