"""
Result containers for point, regional and seasonal-cycle evaluations, with
export functionality.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from milankovic.core.constants import LatitudeBand
from milankovic.core.inputs import ClimateInputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointResult:
    """
    Temperature and its decomposition at one latitude and season.

    Attributes
    ----------
    temperature : float
        Surface temperature in °C, within [-60, 60].
    ice_factor : float
        Ice cover fraction in [0, 1].
    base_temperature : float
        Baseline temperature of the latitude in °C.
    insolation_effect, co2_effect, water_vapor_effect, cloud_effect,
    ice_albedo_effect, seasonal_effect, offset_effect : float
        Contributions in °C. Time-attenuated values are reported.
    sensitivity_used : float
        Climate sensitivity in °C per W/m².
    time_scale_applied : bool
        Whether a finite response time attenuated the effects.
    calculation_error : bool
        True for a fallback result.
    """

    temperature: float
    ice_factor: float
    base_temperature: float
    insolation_effect: float = 0.0
    co2_effect: float = 0.0
    water_vapor_effect: float = 0.0
    cloud_effect: float = 0.0
    ice_albedo_effect: float = 0.0
    seasonal_effect: float = 0.0
    offset_effect: float = 0.0
    sensitivity_used: float = 0.0
    time_scale_applied: bool = False
    calculation_error: bool = False

    EFFECT_NAMES: ClassVar[Tuple[str, ...]] = (
        "insolation_effect",
        "co2_effect",
        "water_vapor_effect",
        "cloud_effect",
        "ice_albedo_effect",
        "seasonal_effect",
        "offset_effect",
    )

    @property
    def is_valid(self) -> bool:
        """Finite temperature and no calculation error."""
        return not self.calculation_error and math.isfinite(self.temperature)

    @property
    def effects(self) -> Dict[str, float]:
        """Named contributions in °C."""
        return {name: getattr(self, name) for name in self.EFFECT_NAMES}

    @property
    def greenhouse_effect(self) -> float:
        """CO2 plus its water-vapour and cloud amplification."""
        return self.co2_effect + self.water_vapor_effect + self.cloud_effect

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EnhancedPointResult(PointResult):
    """PointResult with the additional greenhouse, aerosol and vegetation terms."""

    methane_effect: float = 0.0
    n2o_effect: float = 0.0
    aerosol_effect: float = 0.0
    vegetation_effect: float = 0.0
    additional_forcing: float = 0.0

    EFFECT_NAMES: ClassVar[Tuple[str, ...]] = PointResult.EFFECT_NAMES + (
        "methane_effect",
        "n2o_effect",
        "aerosol_effect",
        "vegetation_effect",
    )


@dataclass(frozen=True)
class Ok:
    """Successful point evaluation."""

    result: PointResult

    is_fallback: ClassVar[bool] = False


@dataclass(frozen=True)
class Fallback:
    """Point evaluation that failed and was replaced by a safe result."""

    result: PointResult
    reason: str

    is_fallback: ClassVar[bool] = True


PointOutcome = Union[Ok, Fallback]


@dataclass(frozen=True)
class BandResult:
    """Point result for one canonical latitude band."""

    band: LatitudeBand
    result: PointResult

    @property
    def latitude(self) -> float:
        return self.band.latitude

    @property
    def name(self) -> str:
        return self.band.name

    @property
    def weight(self) -> float:
        return self.band.weight

    @property
    def temperature(self) -> float:
        return self.result.temperature

    @property
    def ice_factor(self) -> float:
        return self.result.ice_factor

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid


@dataclass(frozen=True)
class RegionResult:
    """
    Banded temperature field and its weighted global mean.

    Attributes
    ----------
    bands : tuple of BandResult
        One entry per canonical band, north to south.
    global_temperature : float
        Weight-normalised mean over valid bands, 15 °C when none is valid.
    inputs : ClimateInputs, optional
        Inputs of the evaluation (latitude is ignored).
    name : str, optional
        Label of the evaluation, e.g. a preset name.
    is_fallback : bool
        True when no band was valid.
    """

    bands: Tuple[BandResult, ...]
    global_temperature: float
    inputs: Optional[ClimateInputs] = None
    name: Optional[str] = None
    is_fallback: bool = False

    @property
    def latitudes(self) -> NDArray[np.float64]:
        return np.array([b.latitude for b in self.bands], dtype=np.float64)

    @property
    def temperatures(self) -> NDArray[np.float64]:
        return np.array([b.temperature for b in self.bands], dtype=np.float64)

    @property
    def ice_factors(self) -> NDArray[np.float64]:
        return np.array([b.ice_factor for b in self.bands], dtype=np.float64)

    @property
    def valid_bands(self) -> Tuple[BandResult, ...]:
        return tuple(b for b in self.bands if b.is_valid)

    @property
    def n_errors(self) -> int:
        return len(self.bands) - len(self.valid_bands)

    @property
    def equator_to_pole_gradient(self) -> float:
        """Equator temperature minus the mean of both poles."""
        equator = self.band(0.0).temperature
        poles = (self.band(90.0).temperature + self.band(-90.0).temperature) / 2.0
        return equator - poles

    def band(self, latitude: float) -> BandResult:
        """
        Band centred at ``latitude``.

        Raises
        ------
        KeyError
            If no band has that latitude.
        """
        for b in self.bands:
            if b.latitude == latitude:
                return b
        raise KeyError(f"No band at latitude {latitude}")

    def profile(self, latitudes: Union[float, Sequence[float], NDArray]) -> NDArray[np.float64]:
        """
        Linearly interpolate the band temperatures to arbitrary latitudes.

        Parameters
        ----------
        latitudes : float or array-like
            Latitudes in degrees, within [-90, 90].

        Returns
        -------
        NDArray
            Interpolated temperatures in °C.
        """
        from scipy.interpolate import interp1d

        lat = self.latitudes[::-1]
        temp = self.temperatures[::-1]
        interpolator = interp1d(lat, temp, kind="linear", bounds_error=True)
        return np.asarray(interpolator(np.asarray(latitudes, dtype=np.float64)), dtype=np.float64)

    def summary(self) -> Dict[str, Any]:
        """Generate summary statistics."""
        temps = self.temperatures
        return {
            "name": self.name or "Custom",
            "global_temperature": float(self.global_temperature),
            "min_band_temperature": float(np.min(temps)),
            "max_band_temperature": float(np.max(temps)),
            "equator_to_pole_gradient": float(self.equator_to_pole_gradient),
            "mean_ice_factor": float(np.sum(self.ice_factors * [b.weight for b in self.bands])),
            "n_bands": len(self.bands),
            "n_errors": self.n_errors,
            "is_fallback": self.is_fallback,
        }

    def to_dataframe(self):
        """One row per band with every contribution."""
        import pandas as pd

        rows = []
        for b in self.bands:
            row = {"band": b.name, "latitude": b.latitude, "weight": b.weight}
            row.update(b.result.to_dict())
            rows.append(row)
        return pd.DataFrame(rows)

    def to_csv(self, filepath: Union[str, Path], float_format: str = "%.6f") -> None:
        """Export the band table to CSV."""
        from milankovic.io.csv_writer import write_region_csv
        write_region_csv(self, filepath, float_format)

    def to_netcdf(self, filepath: Union[str, Path], compression: bool = True) -> None:
        """Export the band field to NetCDF."""
        from milankovic.io.netcdf_writer import write_region_netcdf
        write_region_netcdf(self, filepath, compression)

    def to_png(self, filepath: Union[str, Path], dpi: int = 150) -> None:
        """Plot the latitude profile."""
        from milankovic.visualization.profile import create_profile_plot
        create_profile_plot(self, filepath, dpi)

    def __repr__(self) -> str:
        return (
            f"RegionResult(name='{self.name or 'Custom'}', "
            f"global_temperature={self.global_temperature:.2f}, "
            f"n_errors={self.n_errors})"
        )


@dataclass
class SeasonalCycleResults:
    """
    Regional evaluation over a grid of seasons.

    Attributes
    ----------
    season : NDArray
        Season fractions, shape (n_seasons,).
    latitude : NDArray
        Band latitudes, shape (n_bands,), north to south.
    band_names : tuple of str
        Band names, aligned with ``latitude``.
    weight : NDArray
        Band weights.
    temperature : NDArray
        Band temperatures in °C, shape (n_seasons, n_bands).
    ice_factor : NDArray
        Band ice fractions, shape (n_seasons, n_bands).
    global_temperature : NDArray
        Global mean per season, shape (n_seasons,).
    calculation_error : NDArray
        Fallback flags, shape (n_seasons, n_bands).
    inputs : ClimateInputs, optional
        Inputs shared by every evaluation (season is overridden).
    name : str, optional
        Label, e.g. a preset name.
    """

    season: NDArray[np.float64]
    latitude: NDArray[np.float64]
    band_names: Tuple[str, ...]
    weight: NDArray[np.float64]
    temperature: NDArray[np.float64]
    ice_factor: NDArray[np.float64]
    global_temperature: NDArray[np.float64]
    calculation_error: NDArray[np.bool_]
    inputs: Optional[ClimateInputs] = None
    name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_seasons(self) -> int:
        return len(self.season)

    @property
    def annual_mean(self) -> float:
        """Season-averaged global temperature."""
        return float(np.mean(self.global_temperature))

    @property
    def band_amplitude(self) -> NDArray[np.float64]:
        """Half of the max-minus-min seasonal range of each band."""
        return (np.max(self.temperature, axis=0) - np.min(self.temperature, axis=0)) / 2.0

    @property
    def warmest_season(self) -> float:
        return float(self.season[int(np.argmax(self.global_temperature))])

    @property
    def coldest_season(self) -> float:
        return float(self.season[int(np.argmin(self.global_temperature))])

    def summary(self) -> Dict[str, Any]:
        return {
            "name": self.name or "Custom",
            "n_seasons": self.n_seasons,
            "annual_mean": self.annual_mean,
            "global_min": float(np.min(self.global_temperature)),
            "global_max": float(np.max(self.global_temperature)),
            "warmest_season": self.warmest_season,
            "coldest_season": self.coldest_season,
            "n_errors": int(np.sum(self.calculation_error)),
        }

    def to_dataframe(self):
        """Long table with one row per season and band."""
        import pandas as pd

        n_s, n_b = self.temperature.shape
        return pd.DataFrame({
            "season": np.repeat(self.season, n_b),
            "band": np.tile(np.asarray(self.band_names, dtype=object), n_s),
            "latitude": np.tile(self.latitude, n_s),
            "weight": np.tile(self.weight, n_s),
            "temperature": self.temperature.ravel(),
            "ice_factor": self.ice_factor.ravel(),
            "global_temperature": np.repeat(self.global_temperature, n_b),
            "calculation_error": self.calculation_error.ravel().astype(int),
        })

    def to_csv(self, filepath: Union[str, Path], float_format: str = "%.6f") -> None:
        from milankovic.io.csv_writer import write_seasonal_csv
        write_seasonal_csv(self, filepath, float_format)

    def to_netcdf(self, filepath: Union[str, Path], compression: bool = True) -> None:
        from milankovic.io.netcdf_writer import write_seasonal_netcdf
        write_seasonal_netcdf(self, filepath, compression)

    def to_png(self, filepath: Union[str, Path], dpi: int = 150) -> None:
        from milankovic.visualization.seasonal import create_seasonal_plot
        create_seasonal_plot(self, filepath, dpi)

    def __repr__(self) -> str:
        return (
            f"SeasonalCycleResults(name='{self.name or 'Custom'}', "
            f"n_seasons={self.n_seasons}, annual_mean={self.annual_mean:.2f})"
        )
