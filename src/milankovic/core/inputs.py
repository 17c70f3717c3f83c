"""
Input records for the climate response model.

OrbitalState and Atmosphere describe the planet; ClimateInputs adds the
point of evaluation (latitude, season) and the response settings. All three
are frozen dataclasses: the model never mutates its inputs.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple

from milankovic.core.constants import (
    BASELINE_AXIAL_TILT,
    BASELINE_CO2,
    BASELINE_ECCENTRICITY,
    BASELINE_PRECESSION,
    CLIMATE_SENSITIVITY,
    DEFAULT_LATITUDE,
    DEFAULT_SEASON,
    DEFAULT_SENSITIVITY_LEVEL,
    DEFAULT_TEMP_OFFSET,
    DEFAULT_TIME_SCALE_YEARS,
)
from milankovic.core.guards import is_finite

logger = logging.getLogger(__name__)


def _warn_if_outside(owner: str, name: str, value: Optional[float], bounds: Tuple[float, float]) -> None:
    """Log a warning when a finite value lies outside its physical bounds."""
    if value is None or not is_finite(value):
        return
    lower, upper = bounds
    if value < lower or value > upper:
        logger.warning(
            "%s.%s=%.4f is outside physical range [%.4g, %.4g]",
            owner,
            name,
            value,
            lower,
            upper,
        )


@dataclass(frozen=True)
class OrbitalState:
    """
    Earth's orbital configuration.

    Attributes
    ----------
    eccentricity : float
        Orbital eccentricity [-]. Physical range [0, 0.2].
    axial_tilt : float
        Obliquity in degrees. Physical range [10, 45]; the paleoclimate
        window is [22.1, 24.5].
    precession : float
        Longitude of perihelion in degrees, stored modulo 360.
    """

    eccentricity: float = BASELINE_ECCENTRICITY
    axial_tilt: float = BASELINE_AXIAL_TILT
    precession: float = BASELINE_PRECESSION

    BOUNDS: ClassVar[Dict[str, Tuple[float, float]]] = {
        "eccentricity": (0.0, 0.2),
        "axial_tilt": (10.0, 45.0),
    }

    def __post_init__(self) -> None:
        if is_finite(self.precession):
            object.__setattr__(self, "precession", float(self.precession) % 360.0)
        for name, bounds in self.BOUNDS.items():
            _warn_if_outside("OrbitalState", name, getattr(self, name), bounds)

    @classmethod
    def present_day(cls) -> "OrbitalState":
        """Present-day orbit (e = 0.0167, ε = 23.44°, ϖ = 0°)."""
        return cls()


@dataclass(frozen=True)
class Atmosphere:
    """
    Atmospheric composition.

    Attributes
    ----------
    co2 : float
        CO2 concentration [ppm], >= 1.
    ch4 : float, optional
        CH4 concentration [ppb]. None means pre-industrial.
    n2o : float, optional
        N2O concentration [ppb]. None means pre-industrial.
    aerosol_od : float, optional
        Aerosol optical depth [-]. None means no aerosol loading.
    """

    co2: float = BASELINE_CO2
    ch4: Optional[float] = None
    n2o: Optional[float] = None
    aerosol_od: Optional[float] = None

    def __post_init__(self) -> None:
        _warn_if_outside("Atmosphere", "co2", self.co2, (1.0, float("inf")))
        for name in ("ch4", "n2o", "aerosol_od"):
            _warn_if_outside("Atmosphere", name, getattr(self, name), (0.0, float("inf")))


@dataclass(frozen=True)
class ClimateInputs:
    """
    Full set of inputs for a point or regional evaluation.

    Attributes
    ----------
    orbit : OrbitalState
        Orbital configuration.
    atmosphere : Atmosphere
        Atmospheric composition.
    latitude : float
        Latitude in degrees [-90, 90]. Ignored by the regional aggregator.
        Default 52.37 (Amsterdam).
    season : float
        Fraction of the year, stored modulo 1. Default 0.
    temp_offset : float
        Additive temperature offset in °C. Default 0.
    time_scale_years : float
        Simulated response time in years; 0 means full equilibrium.
    sensitivity_level : str
        One of "low", "medium", "high". Default "medium".
    """

    orbit: OrbitalState = field(default_factory=OrbitalState)
    atmosphere: Atmosphere = field(default_factory=Atmosphere)
    latitude: float = DEFAULT_LATITUDE
    season: float = DEFAULT_SEASON
    temp_offset: float = DEFAULT_TEMP_OFFSET
    time_scale_years: float = DEFAULT_TIME_SCALE_YEARS
    sensitivity_level: str = DEFAULT_SENSITIVITY_LEVEL

    def __post_init__(self) -> None:
        if is_finite(self.season):
            object.__setattr__(self, "season", float(self.season) % 1.0)
        _warn_if_outside("ClimateInputs", "latitude", self.latitude, (-90.0, 90.0))
        _warn_if_outside("ClimateInputs", "time_scale_years", self.time_scale_years, (0.0, float("inf")))
        if self.sensitivity_level not in CLIMATE_SENSITIVITY:
            logger.warning(
                "Unknown sensitivity level %r, '%s' will be used",
                self.sensitivity_level,
                DEFAULT_SENSITIVITY_LEVEL,
            )

    @classmethod
    def from_values(
        cls,
        eccentricity: float = BASELINE_ECCENTRICITY,
        axial_tilt: float = BASELINE_AXIAL_TILT,
        precession: float = BASELINE_PRECESSION,
        co2: float = BASELINE_CO2,
        ch4: Optional[float] = None,
        n2o: Optional[float] = None,
        aerosol_od: Optional[float] = None,
        **kwargs: Any,
    ) -> "ClimateInputs":
        """Build inputs from flat keyword values."""
        return cls(
            orbit=OrbitalState(eccentricity, axial_tilt, precession),
            atmosphere=Atmosphere(co2, ch4, n2o, aerosol_od),
            **kwargs,
        )

    def replace(self, **changes: Any) -> "ClimateInputs":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def with_co2(self, co2: float) -> "ClimateInputs":
        """Return a copy with a different CO2 concentration."""
        return self.replace(atmosphere=dataclasses.replace(self.atmosphere, co2=co2))

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a plain dictionary (for logging and export metadata)."""
        return {
            "eccentricity": self.orbit.eccentricity,
            "axial_tilt": self.orbit.axial_tilt,
            "precession": self.orbit.precession,
            "co2": self.atmosphere.co2,
            "ch4": self.atmosphere.ch4,
            "n2o": self.atmosphere.n2o,
            "aerosol_od": self.atmosphere.aerosol_od,
            "latitude": self.latitude,
            "season": self.season,
            "temp_offset": self.temp_offset,
            "time_scale_years": self.time_scale_years,
            "sensitivity_level": self.sensitivity_level,
        }
