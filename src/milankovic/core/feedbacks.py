"""
Feedback processes and latitude-dependent climatology.

Contains the baseline temperature lookup, the logistic ice fraction, the
seasonal overlay and the amplifiers (water vapour, cloud, ice–albedo,
vegetation albedo) that turn a radiative forcing into a temperature
contribution.
"""

import bisect
import math

from milankovic.core.constants import (
    BASE_TEMPERATURE_TABLE,
    CLOUD_FACTOR,
    FREEZING_POINT,
    ICE_ALBEDO_EQUATOR,
    ICE_ALBEDO_POLE,
    ICE_FALLBACK_FRACTION,
    ICE_LOGISTIC_CLIP,
    ICE_LOGISTIC_WIDTH,
    ICE_THRESHOLD_AMPLITUDE,
    SEASONAL_AMPLITUDE,
    SOUTHERN_HEMISPHERE_ADJUSTMENT,
    VEGETATION_COOLING_SENSITIVITY,
    VEGETATION_WARMING_SENSITIVITY,
    WATER_VAPOR_FACTOR,
)
from milankovic.core.guards import clamp, is_finite, safe_exp

_REFERENCE_LATITUDES = [lat for lat, _ in BASE_TEMPERATURE_TABLE]


def base_temperature(latitude: float) -> float:
    """
    Baseline annual temperature (°C) at the nearest reference latitude.

    References are 0°, 30°, 65° and 90° with 25, 15, -5 and -20 °C. The
    lookup uses |latitude|, so both hemispheres share the table, and the
    southern hemisphere is 1 °C warmer. Equidistant latitudes resolve to the
    lower reference. A non-finite latitude maps to the equator.
    """
    if not is_finite(latitude):
        return BASE_TEMPERATURE_TABLE[0][1]

    magnitude = min(abs(latitude), 90.0)
    idx = bisect.bisect_left(_REFERENCE_LATITUDES, magnitude)
    if idx == 0:
        nearest = 0
    elif idx == len(_REFERENCE_LATITUDES):
        nearest = idx - 1
    else:
        below = magnitude - _REFERENCE_LATITUDES[idx - 1]
        above = _REFERENCE_LATITUDES[idx] - magnitude
        nearest = idx - 1 if below <= above else idx

    temperature = BASE_TEMPERATURE_TABLE[nearest][1]
    if latitude < 0:
        temperature += SOUTHERN_HEMISPHERE_ADJUSTMENT
    return temperature


def ice_fraction(temperature: float, latitude: float) -> float:
    """
    Fraction of ice cover at ``temperature`` (°C) and ``latitude`` (degrees).

    Logistic in temperature around a threshold of 2·cos(latitude) °C with a
    width of 1.5 °C. Returns 0.5 when either input is non-finite.
    """
    if not (is_finite(temperature) and is_finite(latitude)):
        return ICE_FALLBACK_FRACTION

    threshold = FREEZING_POINT + ICE_THRESHOLD_AMPLITUDE * math.cos(math.radians(latitude))
    exponent = (temperature - threshold) / ICE_LOGISTIC_WIDTH
    fraction = 1.0 / (1.0 + safe_exp(exponent, ICE_LOGISTIC_CLIP))
    return clamp(fraction, 0.0, 1.0)


def seasonal_amplitude(latitude: float) -> float:
    """Seasonal half-range in °C: 20 · sin|latitude|."""
    return SEASONAL_AMPLITUDE * math.sin(abs(math.radians(latitude)))


def seasonal_variation(latitude: float, season: float) -> float:
    """
    Seasonal temperature anomaly (°C).

    The northern phase is -π/2 and the southern +π/2, so the hemispheres are
    in antiphase and the curve peaks in the north at s = 0.5. The amplitude
    vanishes at the equator, which hides the phase jump at latitude 0.
    """
    if not (is_finite(latitude) and is_finite(season)):
        return 0.0
    phase = -math.pi / 2.0 if latitude >= 0 else math.pi / 2.0
    return seasonal_amplitude(latitude) * math.sin(2.0 * math.pi * season + phase)


def water_vapor_effect(co2_effect: float) -> float:
    """Water-vapour amplification of the CO2 effect."""
    return WATER_VAPOR_FACTOR * co2_effect


def cloud_effect(co2_effect: float) -> float:
    """Cloud amplification of the CO2 effect."""
    return CLOUD_FACTOR * co2_effect


def ice_albedo_response(latitude: float) -> float:
    """Ice–albedo response strength: 0.5 °C at the equator rising to 4 °C at the poles with sin²."""
    return ICE_ALBEDO_EQUATOR + (ICE_ALBEDO_POLE - ICE_ALBEDO_EQUATOR) * math.sin(math.radians(latitude)) ** 2


def ice_albedo_effect(ice_factor: float, latitude: float) -> float:
    """Cooling (°C, <= 0) from an ice cover ``ice_factor`` at ``latitude``."""
    return -ice_albedo_response(latitude) * ice_factor


def vegetation_albedo_feedback(temperature_change: float, latitude: float) -> float:
    """
    Vegetation albedo feedback (°C).

    Forest/tundra shifts are strongest at high latitudes (sin² weighting) and
    respond faster to warming (0.05) than to cooling (0.03).
    """
    if not (is_finite(temperature_change) and is_finite(latitude)):
        return 0.0
    weight = math.sin(abs(math.radians(latitude))) ** 2
    sensitivity = (
        VEGETATION_WARMING_SENSITIVITY if temperature_change > 0 else VEGETATION_COOLING_SENSITIVITY
    )
    return sensitivity * temperature_change * weight
