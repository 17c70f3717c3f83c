"""
Physical and model constants for the climate response model.

All values are process-wide and immutable. Units are given next to each
constant; temperatures are in °C, forcings in W/m², angles in degrees.
"""

from typing import Dict, NamedTuple, Tuple


# =============================================================================
# RADIATION AND ATMOSPHERE BASELINES
# =============================================================================

SOLAR_CONSTANT = 1361.0  # W/m²
BASELINE_CO2 = 280.0  # ppm (pre-industrial)
BASELINE_CH4 = 700.0  # ppb (pre-industrial)
BASELINE_N2O = 270.0  # ppb (pre-industrial)
BASELINE_AEROSOL_OD = 0.0
FREEZING_POINT = 0.0  # °C

# Present-day orbit used for the baseline insolation
BASELINE_ECCENTRICITY = 0.0167
BASELINE_AXIAL_TILT = 23.44  # degrees
BASELINE_PRECESSION = 0.0  # degrees

# Forcing coefficients
CO2_FORCING_COEFF = 5.35  # W/m² per ln(C/C0)
CH4_FORCING_COEFF = 0.036  # W/m² per sqrt(ppb)
N2O_FORCING_COEFF = 0.12  # W/m² per sqrt(ppb)
AEROSOL_DIRECT_COEFF = -25.0  # W/m² per unit AOD
AEROSOL_INDIRECT_COEFF = -0.7  # W/m² per ln(1 + 10 AOD)


# =============================================================================
# TEMPERATURE BOUNDS AND FALLBACKS
# =============================================================================

TEMPERATURE_MIN = -60.0
TEMPERATURE_MAX = 60.0
FALLBACK_GLOBAL_TEMPERATURE = 15.0
FALLBACK_POLAR_ICE = 0.8  # ice factor reported by fallbacks poleward of 60°
FALLBACK_POLAR_LATITUDE = 60.0


# =============================================================================
# FEEDBACK PARAMETERS
# =============================================================================

INSOLATION_SENSITIVITY = 10.0  # °C per unit relative insolation change
WATER_VAPOR_FACTOR = 0.6  # fraction of the CO2 effect
CLOUD_FACTOR = 0.1  # fraction of the CO2 effect

ICE_THRESHOLD_AMPLITUDE = 2.0  # °C, scales cos(latitude)
ICE_LOGISTIC_WIDTH = 1.5  # °C
ICE_LOGISTIC_CLIP = 50.0
ICE_FALLBACK_FRACTION = 0.5
ICE_ALBEDO_EQUATOR = 0.5  # °C
ICE_ALBEDO_POLE = 4.0  # °C

SEASONAL_AMPLITUDE = 20.0  # °C at the poles

VEGETATION_WARMING_SENSITIVITY = 0.05
VEGETATION_COOLING_SENSITIVITY = 0.03

# Baseline temperature lookup: (|latitude| reference, °C), sorted by latitude
BASE_TEMPERATURE_TABLE: Tuple[Tuple[float, float], ...] = (
    (0.0, 25.0),
    (30.0, 15.0),
    (65.0, -5.0),
    (90.0, -20.0),
)
SOUTHERN_HEMISPHERE_ADJUSTMENT = 1.0  # °C


# =============================================================================
# CLIMATE SENSITIVITY
# =============================================================================

# °C per W/m²
CLIMATE_SENSITIVITY: Dict[str, float] = {
    "low": 0.5,
    "medium": 0.75,
    "high": 1.0,
}
DEFAULT_SENSITIVITY_LEVEL = "medium"


# =============================================================================
# RESPONSE TIME CONSTANTS (years)
# =============================================================================

TAU_ATMOSPHERE = 1.0
TAU_OCEAN = 500.0
TAU_ICE_SHEETS = 5000.0


# =============================================================================
# INSOLATION KERNEL
# =============================================================================

POLAR_LATITUDE = 89.0  # |latitude| at and above which the polar formula applies
MIN_ORBITAL_RADIUS = 1e-3
MIN_BASELINE_INSOLATION = 1e-3  # W/m²

# North pole dark season: season <= start or season >= end
POLAR_NIGHT_NORTH = (0.2, 0.7)


# =============================================================================
# LATITUDE BANDS
# =============================================================================

class LatitudeBand(NamedTuple):
    """Canonical latitude band used by the regional aggregator."""

    latitude: float
    name: str
    weight: float


LATITUDE_BANDS: Tuple[LatitudeBand, ...] = (
    LatitudeBand(90.0, "North Pole", 0.05),
    LatitudeBand(65.0, "Northern High Latitude", 0.15),
    LatitudeBand(30.0, "Northern Mid Latitude", 0.25),
    LatitudeBand(0.0, "Equator", 0.10),
    LatitudeBand(-30.0, "Southern Mid Latitude", 0.25),
    LatitudeBand(-65.0, "Southern High Latitude", 0.15),
    LatitudeBand(-90.0, "South Pole", 0.05),
)

assert abs(sum(band.weight for band in LATITUDE_BANDS) - 1.0) < 1e-9, (
    "latitude band weights must sum to 1"
)


# =============================================================================
# DEFAULT INPUTS
# =============================================================================

DEFAULT_LATITUDE = 52.37  # Amsterdam
DEFAULT_SEASON = 0.0
DEFAULT_TEMP_OFFSET = 0.0
DEFAULT_TIME_SCALE_YEARS = 0.0
