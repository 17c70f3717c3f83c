"""
milankovic - Climate Response Model for orbital (Milankovitch) forcing

Computes daily insolation from Earth's orbital parameters, greenhouse
forcing and a chain of feedbacks, and aggregates the resulting temperature
and ice cover over seven latitude bands into a global mean.
"""

__version__ = "0.1.0"

from milankovic.core.constants import LATITUDE_BANDS, LatitudeBand
from milankovic.core.inputs import OrbitalState, Atmosphere, ClimateInputs
from milankovic.core.insolation import daily_insolation, baseline_insolation
from milankovic.core.forcing import co2_forcing
from milankovic.core.feedbacks import ice_fraction, seasonal_variation
from milankovic.core.display import normalize_temperature, smooth_temperature
from milankovic.core.model import (
    ClimateModel,
    solve_point,
    point_temperature,
    regional_temperatures,
    enhanced_point_temperature,
    seasonal_cycle,
)
from milankovic.core.results import PointResult, RegionResult, SeasonalCycleResults, Ok, Fallback
from milankovic.scenarios import PRESETS, PARAMETER_RANGES, get_preset, list_presets

__all__ = [
    "__version__",
    "LATITUDE_BANDS",
    "LatitudeBand",
    "OrbitalState",
    "Atmosphere",
    "ClimateInputs",
    "daily_insolation",
    "baseline_insolation",
    "co2_forcing",
    "ice_fraction",
    "seasonal_variation",
    "normalize_temperature",
    "smooth_temperature",
    "ClimateModel",
    "solve_point",
    "point_temperature",
    "regional_temperatures",
    "enhanced_point_temperature",
    "seasonal_cycle",
    "PointResult",
    "RegionResult",
    "SeasonalCycleResults",
    "Ok",
    "Fallback",
    "PRESETS",
    "PARAMETER_RANGES",
    "get_preset",
    "list_presets",
]
