"""Core climate response model components."""

from milankovic.core.inputs import OrbitalState, Atmosphere, ClimateInputs
from milankovic.core.results import (
    PointResult,
    EnhancedPointResult,
    Ok,
    Fallback,
    BandResult,
    RegionResult,
    SeasonalCycleResults,
)
from milankovic.core.model import (
    ClimateModel,
    solve_point,
    point_temperature,
    regional_temperatures,
    enhanced_point_temperature,
    seasonal_cycle,
    co2_sweep,
)

__all__ = [
    "OrbitalState",
    "Atmosphere",
    "ClimateInputs",
    "PointResult",
    "EnhancedPointResult",
    "Ok",
    "Fallback",
    "BandResult",
    "RegionResult",
    "SeasonalCycleResults",
    "ClimateModel",
    "solve_point",
    "point_temperature",
    "regional_temperatures",
    "enhanced_point_temperature",
    "seasonal_cycle",
    "co2_sweep",
]
