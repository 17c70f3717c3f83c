"""
Radiative forcing of greenhouse gases and aerosols (W/m²).

CO2 uses the logarithmic IPCC expression, CH4 and N2O the square-root
approximations; aerosols combine a linear direct term and a logarithmic
indirect (cloud) term. Each function returns 0 for a non-finite input.
"""

import math
from typing import Optional

from milankovic.core.constants import (
    AEROSOL_DIRECT_COEFF,
    AEROSOL_INDIRECT_COEFF,
    BASELINE_CH4,
    BASELINE_CO2,
    BASELINE_N2O,
    CH4_FORCING_COEFF,
    CO2_FORCING_COEFF,
    N2O_FORCING_COEFF,
)
from milankovic.core.guards import finite_or, is_finite, safe_log


def co2_forcing(co2: float) -> float:
    """CO2 forcing 5.35 · ln(max(1, C) / 280)."""
    if not is_finite(co2):
        return 0.0
    return CO2_FORCING_COEFF * safe_log(max(1.0, co2) / BASELINE_CO2)


def methane_forcing(ch4: float) -> float:
    """CH4 forcing 0.036 · (√max(1, M) − √700)."""
    if not is_finite(ch4):
        return 0.0
    return CH4_FORCING_COEFF * (math.sqrt(max(1.0, ch4)) - math.sqrt(BASELINE_CH4))


def n2o_forcing(n2o: float) -> float:
    """N2O forcing 0.12 · (√max(1, N) − √270)."""
    if not is_finite(n2o):
        return 0.0
    return N2O_FORCING_COEFF * (math.sqrt(max(1.0, n2o)) - math.sqrt(BASELINE_N2O))


def aerosol_forcing(aerosol_od: float) -> float:
    """Aerosol forcing −25·AOD − 0.7·ln(1 + 10·AOD); negative AOD is treated as 0."""
    if not is_finite(aerosol_od):
        return 0.0
    aod = max(0.0, aerosol_od)
    direct = AEROSOL_DIRECT_COEFF * aod
    indirect = AEROSOL_INDIRECT_COEFF * math.log1p(10.0 * aod)
    return finite_or(direct + indirect, 0.0)


def optional_forcing(func, value: Optional[float]) -> float:
    """Apply a forcing function to an optional concentration; None means baseline."""
    if value is None:
        return 0.0
    return func(value)
