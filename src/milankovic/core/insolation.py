"""
Daily top-of-atmosphere insolation.

General case (|latitude| < 89°):

    θ = 2πs + ϖ
    r = (1 - e²) / (1 + e cos θ)                 floored at 1e-3
    δ = asin(sin ε · sin(θ + ϖ + π))
    H = acos(clamp(-tan φ · tan δ, -1, 1))
    Q = S₀ / (π r²) · (H sin φ sin δ + cos φ cos δ sin H)

The precession angle enters twice, once through the true anomaly and once
through the longitude of the Sun in the declination. The kernel keeps that
form; see ``DESIGN.md`` for the discussion.

Polar case (|latitude| >= 89°): Q is zero during the hemispheric dark season
and S₀/4 · sin ε · (1 + e sin(π(s - 0.25))) otherwise.
"""

import math

from milankovic.core.constants import (
    BASELINE_AXIAL_TILT,
    BASELINE_ECCENTRICITY,
    BASELINE_PRECESSION,
    MIN_ORBITAL_RADIUS,
    POLAR_LATITUDE,
    POLAR_NIGHT_NORTH,
    SOLAR_CONSTANT,
)
from milankovic.core.guards import first_non_finite, is_finite, safe_acos, safe_asin


def is_polar_night(latitude: float, season: float) -> bool:
    """
    Whether a pole is in its dark season.

    The north pole is dark for s in [0, 0.2] ∪ [0.7, 1); the south pole's
    dark season is the northern one shifted by half a year, s in [0.2, 0.7].
    Only meaningful for |latitude| >= 89°.
    """
    start, end = POLAR_NIGHT_NORTH
    if latitude > 0:
        return season <= start or season >= end
    return start <= season <= end


def _polar_insolation(latitude: float, season: float, eccentricity: float, tilt_rad: float) -> float:
    if is_polar_night(latitude, season):
        return 0.0
    q = (
        SOLAR_CONSTANT / 4.0
        * math.sin(tilt_rad)
        * (1.0 + eccentricity * math.sin(math.pi * (season - 0.25)))
    )
    return max(0.0, q)


def daily_insolation(
    latitude: float,
    season: float,
    eccentricity: float,
    axial_tilt: float,
    precession: float,
) -> float:
    """
    Daily mean top-of-atmosphere insolation.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    season : float
        Fraction of the year; wrapped modulo 1.
    eccentricity : float
        Orbital eccentricity.
    axial_tilt : float
        Obliquity in degrees.
    precession : float
        Longitude of perihelion in degrees; wrapped modulo 360.

    Returns
    -------
    float
        Insolation in W/m², finite and >= 0. Non-finite inputs or
        intermediates give 0.
    """
    if first_non_finite(
        latitude=latitude,
        season=season,
        eccentricity=eccentricity,
        axial_tilt=axial_tilt,
        precession=precession,
    ):
        return 0.0

    season = season % 1.0
    precession = precession % 360.0
    tilt_rad = math.radians(axial_tilt)

    if abs(latitude) >= POLAR_LATITUDE:
        q = _polar_insolation(latitude, season, eccentricity, tilt_rad)
        return q if is_finite(q) else 0.0

    lat_rad = math.radians(latitude)
    prec_rad = math.radians(precession)

    true_anomaly = 2.0 * math.pi * season + prec_rad
    radius = (1.0 - eccentricity**2) / (1.0 + eccentricity * math.cos(true_anomaly))
    if not is_finite(radius):
        return 0.0
    radius = max(radius, MIN_ORBITAL_RADIUS)

    declination = safe_asin(math.sin(tilt_rad) * math.sin(true_anomaly + prec_rad + math.pi))
    hour_angle = safe_acos(-math.tan(lat_rad) * math.tan(declination))

    q = (SOLAR_CONSTANT / (math.pi * radius * radius)) * (
        hour_angle * math.sin(lat_rad) * math.sin(declination)
        + math.cos(lat_rad) * math.cos(declination) * math.sin(hour_angle)
    )
    if not is_finite(q):
        return 0.0
    return max(0.0, q)


def baseline_insolation(latitude: float, season: float) -> float:
    """Insolation under the present-day reference orbit (e = 0.0167, ε = 23.44°, ϖ = 0°)."""
    return daily_insolation(
        latitude,
        season,
        BASELINE_ECCENTRICITY,
        BASELINE_AXIAL_TILT,
        BASELINE_PRECESSION,
    )
