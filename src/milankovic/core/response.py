"""First-order relaxation of the climate response toward equilibrium."""

import math
from typing import NamedTuple

from milankovic.core.constants import TAU_ATMOSPHERE, TAU_ICE_SHEETS, TAU_OCEAN
from milankovic.core.guards import is_finite


class ResponseFactors(NamedTuple):
    """Attenuation factors in [0, 1] for each process."""

    atmosphere: float
    ocean: float
    ice_sheets: float
    applied: bool


EQUILIBRIUM = ResponseFactors(1.0, 1.0, 1.0, False)


def relaxation_factor(time_scale_years: float, process_tau_years: float) -> float:
    """
    Fraction of the equilibrium response reached after ``time_scale_years``.

    r = 1 - exp(-t / τ). Returns 1 for a non-positive or non-finite time
    constant.
    """
    if not (is_finite(process_tau_years) and process_tau_years > 0):
        return 1.0
    if not is_finite(time_scale_years):
        return 1.0 if time_scale_years > 0 else 0.0
    return 1.0 - math.exp(-max(0.0, time_scale_years) / process_tau_years)


def time_response_factors(time_scale_years: float) -> ResponseFactors:
    """
    Attenuation factors for a simulated response time.

    A time scale of 0 (or negative, or NaN) reports full equilibrium.
    """
    if not is_finite(time_scale_years) and time_scale_years != float("inf"):
        return EQUILIBRIUM
    if time_scale_years <= 0:
        return EQUILIBRIUM
    return ResponseFactors(
        atmosphere=relaxation_factor(time_scale_years, TAU_ATMOSPHERE),
        ocean=relaxation_factor(time_scale_years, TAU_OCEAN),
        ice_sheets=relaxation_factor(time_scale_years, TAU_ICE_SHEETS),
        applied=True,
    )
