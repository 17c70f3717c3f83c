"""
Climate response model: point solver, regional aggregator and the
``ClimateModel`` facade used by the command line.
"""

import logging
import math
from typing import Any, Dict, Iterable, Optional, Union

import numpy as np
from tqdm import tqdm

from milankovic.core.constants import (
    CLIMATE_SENSITIVITY,
    DEFAULT_SENSITIVITY_LEVEL,
    FALLBACK_GLOBAL_TEMPERATURE,
    FALLBACK_POLAR_ICE,
    FALLBACK_POLAR_LATITUDE,
    INSOLATION_SENSITIVITY,
    LATITUDE_BANDS,
    MIN_BASELINE_INSOLATION,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
)
from milankovic.core.feedbacks import (
    base_temperature,
    cloud_effect,
    ice_albedo_effect,
    ice_fraction,
    seasonal_variation,
    vegetation_albedo_feedback,
    water_vapor_effect,
)
from milankovic.core.forcing import (
    aerosol_forcing,
    co2_forcing,
    methane_forcing,
    n2o_forcing,
    optional_forcing,
)
from milankovic.core.guards import NumericFailure, clamp, is_finite, require_finite, safe_divide
from milankovic.core.inputs import ClimateInputs
from milankovic.core.insolation import baseline_insolation, daily_insolation
from milankovic.core.response import time_response_factors
from milankovic.core.results import (
    BandResult,
    EnhancedPointResult,
    Fallback,
    Ok,
    PointOutcome,
    PointResult,
    RegionResult,
    SeasonalCycleResults,
)
from milankovic.scenarios import get_preset
from milankovic.utils.logging import log_calculation_issue, timed_step

logger = logging.getLogger(__name__)


def sensitivity_for(level: str) -> float:
    """Climate sensitivity (°C per W/m²) for a level name; unknown names map to medium."""
    return CLIMATE_SENSITIVITY.get(level, CLIMATE_SENSITIVITY[DEFAULT_SENSITIVITY_LEVEL])


def fallback_result(latitude: float, sensitivity: float = 0.0) -> PointResult:
    """
    Safe replacement for a failed point evaluation.

    Temperature is the latitude's baseline, the ice factor 0.8 poleward of
    60° and 0 elsewhere, and every effect is zero.
    """
    lat = latitude if is_finite(latitude) else 0.0
    t0 = base_temperature(lat)
    return PointResult(
        temperature=t0,
        ice_factor=FALLBACK_POLAR_ICE if abs(lat) > FALLBACK_POLAR_LATITUDE else 0.0,
        base_temperature=t0,
        sensitivity_used=sensitivity,
        calculation_error=True,
    )


def _evaluate(inputs: ClimateInputs, latitude: float) -> PointResult:
    """Run the point algorithm; raises NumericFailure on non-finite values."""
    orbit = inputs.orbit
    lat = require_finite("latitude", latitude)
    season = require_finite("season", inputs.season)
    require_finite("eccentricity", orbit.eccentricity)
    require_finite("axial_tilt", orbit.axial_tilt)
    require_finite("precession", orbit.precession)
    co2 = require_finite("co2", inputs.atmosphere.co2)
    offset = require_finite("temp_offset", inputs.temp_offset)
    if math.isnan(inputs.time_scale_years):
        raise NumericFailure("time_scale_years is NaN")

    t0 = base_temperature(lat)

    q = daily_insolation(lat, season, orbit.eccentricity, orbit.axial_tilt, orbit.precession)
    q_base = baseline_insolation(lat, season)
    delta = safe_divide(q - q_base, q_base) if q_base > MIN_BASELINE_INSOLATION else 0.0
    e_ins = INSOLATION_SENSITIVITY * delta

    sensitivity = sensitivity_for(inputs.sensitivity_level)
    e_co2 = sensitivity * co2_forcing(co2)
    e_wv = water_vapor_effect(e_co2)
    e_cl = cloud_effect(e_co2)

    preliminary = t0 + e_ins + e_co2 + e_wv + e_cl
    ice = ice_fraction(preliminary, lat)
    e_ice = ice_albedo_effect(ice, lat)
    e_season = seasonal_variation(lat, season)

    factors = time_response_factors(inputs.time_scale_years)
    e_co2 *= factors.atmosphere
    e_wv *= factors.atmosphere
    e_cl *= factors.atmosphere
    e_ice *= factors.ice_sheets

    temperature = t0 + e_ins + e_co2 + e_wv + e_cl + e_ice + e_season + offset
    temperature = require_finite("temperature", temperature)

    return PointResult(
        temperature=clamp(temperature, TEMPERATURE_MIN, TEMPERATURE_MAX),
        ice_factor=ice,
        base_temperature=t0,
        insolation_effect=e_ins,
        co2_effect=e_co2,
        water_vapor_effect=e_wv,
        cloud_effect=e_cl,
        ice_albedo_effect=e_ice,
        seasonal_effect=e_season,
        offset_effect=offset,
        sensitivity_used=sensitivity,
        time_scale_applied=factors.applied,
    )


def solve_point(inputs: ClimateInputs, latitude: Optional[float] = None) -> PointOutcome:
    """
    Evaluate the temperature at one latitude and season.

    Parameters
    ----------
    inputs : ClimateInputs
        Model inputs.
    latitude : float, optional
        Overrides ``inputs.latitude``; used by the regional aggregator.

    Returns
    -------
    Ok or Fallback
        ``Fallback`` carries a baseline result and the failure reason. No
        exception leaves this function.
    """
    lat = inputs.latitude if latitude is None else latitude
    try:
        return Ok(_evaluate(inputs, lat))
    except Exception as e:
        reason = f"{type(e).__name__}: {e}"
        log_calculation_issue(
            "Point fallback",
            f"latitude={lat}: {reason}",
            inputs.to_dict(),
        )
        return Fallback(fallback_result(lat, sensitivity_for(inputs.sensitivity_level)), reason)


def point_temperature(inputs: ClimateInputs) -> PointResult:
    """PointResult at ``inputs.latitude``; fallbacks have ``calculation_error`` set."""
    return solve_point(inputs).result


def _fallback_field(inputs: Optional[ClimateInputs], name: Optional[str]) -> RegionResult:
    bands = tuple(BandResult(band, fallback_result(band.latitude)) for band in LATITUDE_BANDS)
    return RegionResult(
        bands=bands,
        global_temperature=FALLBACK_GLOBAL_TEMPERATURE,
        inputs=inputs,
        name=name,
        is_fallback=True,
    )


def regional_temperatures(inputs: ClimateInputs, name: Optional[str] = None) -> RegionResult:
    """
    Evaluate every canonical latitude band and the weighted global mean.

    ``inputs.latitude`` is ignored. The global mean is normalised by the
    total weight of the valid bands; with no valid band the result is the
    fixed fallback field at 15 °C.
    """
    bands = tuple(
        BandResult(band, solve_point(inputs, latitude=band.latitude).result)
        for band in LATITUDE_BANDS
    )

    valid = [b for b in bands if b.is_valid]
    if not valid:
        log_calculation_issue(
            "Regional fallback",
            "no latitude band produced a valid result",
            inputs.to_dict(),
        )
        return _fallback_field(inputs, name)

    total_weight = sum(b.weight for b in valid)
    global_temperature = sum(b.temperature * b.weight for b in valid) / total_weight
    if not is_finite(global_temperature):
        return _fallback_field(inputs, name)

    return RegionResult(bands=bands, global_temperature=global_temperature, inputs=inputs, name=name)


def enhanced_point_temperature(inputs: ClimateInputs) -> EnhancedPointResult:
    """
    Point result with methane, nitrous oxide, aerosol and vegetation terms.

    The extra greenhouse and aerosol effects are sensitivity × forcing,
    attenuated with the atmospheric response time. The vegetation albedo
    term responds to the departure of the point temperature from its
    baseline.
    """
    base = point_temperature(inputs)
    if base.calculation_error:
        return EnhancedPointResult(**base.to_dict())

    atmosphere = inputs.atmosphere
    factors = time_response_factors(inputs.time_scale_years)
    scale = base.sensitivity_used * factors.atmosphere

    ch4 = optional_forcing(methane_forcing, atmosphere.ch4)
    n2o = optional_forcing(n2o_forcing, atmosphere.n2o)
    aerosol = optional_forcing(aerosol_forcing, atmosphere.aerosol_od)

    e_ch4 = scale * ch4
    e_n2o = scale * n2o
    e_aer = scale * aerosol
    e_veg = vegetation_albedo_feedback(base.temperature - base.base_temperature, inputs.latitude)

    temperature = base.temperature + e_ch4 + e_n2o + e_aer + e_veg
    if not is_finite(temperature):
        log_calculation_issue("Enhanced fallback", "non-finite temperature", inputs.to_dict())
        return EnhancedPointResult(**fallback_result(inputs.latitude, base.sensitivity_used).to_dict())

    fields = base.to_dict()
    fields["temperature"] = clamp(temperature, TEMPERATURE_MIN, TEMPERATURE_MAX)
    return EnhancedPointResult(
        **fields,
        methane_effect=e_ch4,
        n2o_effect=e_n2o,
        aerosol_effect=e_aer,
        vegetation_effect=e_veg,
        additional_forcing=ch4 + n2o + aerosol,
    )


def season_grid(n_seasons: int) -> np.ndarray:
    """``n_seasons`` evenly spaced season fractions in [0, 1)."""
    if n_seasons < 1:
        raise ValueError(f"n_seasons must be >= 1, got {n_seasons}")
    return np.arange(n_seasons, dtype=np.float64) / n_seasons


def seasonal_cycle(
    inputs: ClimateInputs,
    n_seasons: int = 48,
    name: Optional[str] = None,
    show_progress: bool = False,
) -> SeasonalCycleResults:
    """
    Regional evaluation over an evenly spaced season grid.

    Returns
    -------
    SeasonalCycleResults
        Band temperature and ice fields of shape (n_seasons, 7) and the
        global-mean curve.
    """
    seasons = season_grid(n_seasons)
    n_bands = len(LATITUDE_BANDS)
    temperature = np.empty((n_seasons, n_bands))
    ice = np.empty((n_seasons, n_bands))
    errors = np.zeros((n_seasons, n_bands), dtype=bool)
    global_temperature = np.empty(n_seasons)

    for i, s in enumerate(tqdm(seasons, desc="Seasonal cycle", disable=not show_progress)):
        region = regional_temperatures(inputs.replace(season=float(s)), name=name)
        temperature[i] = region.temperatures
        ice[i] = region.ice_factors
        errors[i] = [not b.is_valid for b in region.bands]
        global_temperature[i] = region.global_temperature

    if errors.any():
        log_calculation_issue(
            "Seasonal cycle fallbacks",
            f"{int(errors.sum())} of {errors.size} band evaluations fell back",
        )

    return SeasonalCycleResults(
        season=seasons,
        latitude=np.array([b.latitude for b in LATITUDE_BANDS], dtype=np.float64),
        band_names=tuple(b.name for b in LATITUDE_BANDS),
        weight=np.array([b.weight for b in LATITUDE_BANDS], dtype=np.float64),
        temperature=temperature,
        ice_factor=ice,
        global_temperature=global_temperature,
        calculation_error=errors,
        inputs=inputs,
        name=name,
    )


def co2_sweep(
    inputs: ClimateInputs,
    co2_values: Iterable[float],
    show_progress: bool = False,
):
    """
    Global temperature as a function of CO2 with everything else fixed.

    Returns
    -------
    pandas.DataFrame
        Columns co2, forcing, global_temperature and delta_temperature
        (relative to the first concentration).
    """
    import pandas as pd

    co2_values = [float(c) for c in co2_values]
    rows = []
    for co2 in tqdm(co2_values, desc="CO2 sweep", disable=not show_progress):
        region = regional_temperatures(inputs.with_co2(co2))
        rows.append({
            "co2": co2,
            "forcing": co2_forcing(co2),
            "global_temperature": region.global_temperature,
            "n_errors": region.n_errors,
        })

    df = pd.DataFrame(rows, columns=["co2", "forcing", "global_temperature", "n_errors"])
    if len(df):
        df["delta_temperature"] = df["global_temperature"] - df["global_temperature"].iloc[0]
    else:
        df["delta_temperature"] = pd.Series(dtype=float)
    return df


class ClimateModel:
    """
    Climate Response Model facade.

    Holds the response settings shared by every evaluation and builds
    ``ClimateInputs`` from presets or explicit values.

    Parameters
    ----------
    sensitivity_level : str, optional
        "low" (0.5), "medium" (0.75) or "high" (1.0) °C per W/m².
        Default "medium".
    time_scale_years : float, optional
        Simulated response time; 0 means equilibrium. Default 0.
    temp_offset : float, optional
        Additive temperature offset in °C. Default 0.

    Attributes
    ----------
    params : dict
        Model settings.
    """

    def __init__(
        self,
        sensitivity_level: str = DEFAULT_SENSITIVITY_LEVEL,
        time_scale_years: float = 0.0,
        temp_offset: float = 0.0,
    ):
        self.params = {
            "sensitivity_level": sensitivity_level,
            "time_scale_years": time_scale_years,
            "temp_offset": temp_offset,
        }
        self._validate_params()
        logger.debug(f"Initialized ClimateModel with params: {self.params}")

    def _validate_params(self) -> None:
        """Warn about settings outside their documented ranges."""
        issues = []
        if self.params["sensitivity_level"] not in CLIMATE_SENSITIVITY:
            issues.append(
                f"sensitivity_level={self.params['sensitivity_level']!r} is not one of "
                f"{sorted(CLIMATE_SENSITIVITY)}"
            )
        tau = self.params["time_scale_years"]
        if not is_finite(tau) or tau < 0:
            issues.append(f"time_scale_years={tau} should be finite and >= 0")

        for msg in issues:
            logger.warning(msg)
        if issues:
            log_calculation_issue("Parameter validation", "Some settings outside documented ranges", self.params)

    @property
    def sensitivity(self) -> float:
        return sensitivity_for(self.params["sensitivity_level"])

    def inputs(self, preset: Optional[str] = None, **values: Any) -> ClimateInputs:
        """
        Build inputs from a preset or flat values, filled with the model settings.

        Parameters
        ----------
        preset : str, optional
            Preset key or name. Orbit and CO2 come from the preset; keyword
            values override them.
        **values
            Any ``ClimateInputs.from_values`` keyword (eccentricity,
            axial_tilt, precession, co2, ch4, n2o, aerosol_od, latitude,
            season, temp_offset, time_scale_years, sensitivity_level).
        """
        settings: Dict[str, Any] = dict(self.params)
        if preset is not None:
            p = get_preset(preset)
            settings.update(
                eccentricity=p.orbit.eccentricity,
                axial_tilt=p.orbit.axial_tilt,
                precession=p.orbit.precession,
                co2=p.co2,
            )
        settings.update({k: v for k, v in values.items() if v is not None})
        return ClimateInputs.from_values(**settings)

    def point(self, inputs: ClimateInputs, enhanced: bool = False) -> Union[PointResult, EnhancedPointResult]:
        """Point evaluation, optionally with the additional feedbacks."""
        with timed_step("Point evaluation"):
            if enhanced:
                return enhanced_point_temperature(inputs)
            return point_temperature(inputs)

    def run(self, inputs: ClimateInputs, name: Optional[str] = None) -> RegionResult:
        """Regional evaluation with step timing and a summary log line."""
        with timed_step("Regional evaluation"):
            result = regional_temperatures(inputs, name=name)
        logger.info(
            f"{name or 'Custom'}: global mean {result.global_temperature:.2f} °C "
            f"({result.n_errors} band errors)"
        )
        return result

    def cycle(
        self,
        inputs: ClimateInputs,
        n_seasons: int = 48,
        name: Optional[str] = None,
        show_progress: bool = True,
    ) -> SeasonalCycleResults:
        """Seasonal cycle with step timing."""
        with timed_step("Seasonal cycle"):
            result = seasonal_cycle(inputs, n_seasons, name=name, show_progress=show_progress)
        logger.info(
            f"{name or 'Custom'}: annual mean {result.annual_mean:.2f} °C over {n_seasons} seasons"
        )
        return result

    def sweep(self, inputs: ClimateInputs, co2_values: Iterable[float], show_progress: bool = True):
        """CO2 sweep with step timing."""
        with timed_step("CO2 sweep"):
            return co2_sweep(inputs, co2_values, show_progress=show_progress)

    def __repr__(self) -> str:
        p = self.params
        return (
            f"ClimateModel(sensitivity_level='{p['sensitivity_level']}', "
            f"time_scale_years={p['time_scale_years']}, temp_offset={p['temp_offset']})"
        )
