"""
Paleoclimate preset configurations.

Orbital parameters after Berger & Loutre (1991) and Laskar et al. (2004):
- LGM: Last Glacial Maximum, 21 kyr BP
- Mid-Holocene: Holocene climatic optimum, 6 kyr BP
- MPT: Mid-Pleistocene Transition, 800 kyr BP
- PETM: Paleocene-Eocene Thermal Maximum, 56 Myr BP
- Future: projected orbit 50 kyr after present
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from milankovic.core.inputs import Atmosphere, ClimateInputs, OrbitalState

# Documented paleoclimate ranges of the orbital parameters and CO2 levels
PARAMETER_RANGES: Dict[str, Dict[str, Any]] = {
    "eccentricity": {"min": 0.0034, "max": 0.058, "current": 0.0167},
    "axial_tilt": {"min": 22.1, "max": 24.5, "current": 23.44},
    "precession": {"min": 0.0, "max": 360.0},
    "co2": {
        "preindustrial": 280.0,
        "glacial": 180.0,
        "petm": (1000.0, 2000.0),
        "current": 420.0,
    },
}


@dataclass(frozen=True)
class Preset:
    """
    Named orbital and CO2 configuration.

    Attributes
    ----------
    key : str
        Catalog key.
    name : str
        Display name.
    orbit : OrbitalState
        Orbital configuration.
    co2 : float
        CO2 concentration [ppm].
    year : int
        Calendar year relative to present (negative = before present).
    expected_temp_range : tuple of float
        Reconstructed global mean temperature range [°C].
    description : str
        One-paragraph summary.
    color : str
        Line colour used in figures.
    """

    key: str
    name: str
    orbit: OrbitalState
    co2: float
    year: int
    expected_temp_range: Tuple[float, float]
    description: str
    color: str = "#4C72B0"

    def inputs(self, **kwargs: Any) -> ClimateInputs:
        """ClimateInputs with this preset's orbit and CO2."""
        return ClimateInputs(orbit=self.orbit, atmosphere=Atmosphere(co2=self.co2), **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "eccentricity": self.orbit.eccentricity,
            "axial_tilt": self.orbit.axial_tilt,
            "precession": self.orbit.precession,
            "co2": self.co2,
            "year": self.year,
            "expected_temp_min": self.expected_temp_range[0],
            "expected_temp_max": self.expected_temp_range[1],
            "description": self.description,
        }


PRESETS: Dict[str, Preset] = {
    "lgm": Preset(
        key="lgm",
        name="Last Glacial Maximum (21,000 BP)",
        orbit=OrbitalState(eccentricity=0.019, axial_tilt=22.99, precession=114.0),
        co2=180.0,
        year=-21_000,
        expected_temp_range=(-6.0, -2.0),
        description=(
            "Peak of last ice age with extensive ice sheets. Northern Hemisphere "
            "summers occurred near aphelion, minimizing summer insolation."
        ),
        color="#3A86FF",
    ),
    "mid_holocene": Preset(
        key="mid_holocene",
        name="Mid-Holocene Optimum (6,000 BP)",
        orbit=OrbitalState(eccentricity=0.0187, axial_tilt=24.1, precession=303.0),
        co2=265.0,
        year=-6_000,
        expected_temp_range=(14.0, 16.0),
        description=(
            "Warm period with enhanced seasonal contrasts. Northern Hemisphere "
            "summers near perihelion maximized summer insolation."
        ),
        color="#2A9D8F",
    ),
    "mpt": Preset(
        key="mpt",
        name="Mid-Pleistocene Transition (800,000 BP)",
        orbit=OrbitalState(eccentricity=0.043, axial_tilt=22.3, precession=275.0),
        co2=240.0,
        year=-800_000,
        expected_temp_range=(8.0, 12.0),
        description=(
            "Transition period when glacial cycles shifted from 41,000-year to "
            "100,000-year periods."
        ),
        color="#8338EC",
    ),
    "petm": Preset(
        key="petm",
        name="PETM (56 Million BP)",
        orbit=OrbitalState(eccentricity=0.052, axial_tilt=23.8, precession=180.0),
        co2=1500.0,
        year=-56_000_000,
        expected_temp_range=(22.0, 28.0),
        description=(
            "Paleocene-Eocene Thermal Maximum - extreme global warming event with "
            "high CO2 levels."
        ),
        color="#E63946",
    ),
    "future": Preset(
        key="future",
        name="Future Configuration (50,000 AP)",
        orbit=OrbitalState(eccentricity=0.015, axial_tilt=23.2, precession=90.0),
        co2=280.0,
        year=50_000,
        expected_temp_range=(10.0, 14.0),
        description="Projected orbital configuration showing reduced seasonal contrasts.",
        color="#F4A261",
    ),
}

_ALIASES = {
    "lastglacialmaximum": "lgm",
    "glacial": "lgm",
    "21kbp": "lgm",
    "midholocene": "mid_holocene",
    "holocene": "mid_holocene",
    "holoceneoptimum": "mid_holocene",
    "6kbp": "mid_holocene",
    "midpleistocenetransition": "mpt",
    "pleistocene": "mpt",
    "800kbp": "mpt",
    "paleoceneeocenethermalmaximum": "petm",
    "futureconfiguration": "future",
    "50kap": "future",
}


def _normalize(key: str) -> str:
    return "".join(ch for ch in key.lower() if ch.isalnum())


def get_preset(key: str) -> Preset:
    """
    Get a preset by key, display name or alias.

    Parameters
    ----------
    key : str
        Preset key (e.g. "lgm", "mid-holocene"), its display name, or an
        alias such as "glacial".

    Returns
    -------
    Preset

    Raises
    ------
    KeyError
        If no preset matches.
    """
    wanted = _normalize(key)
    for preset in PRESETS.values():
        if wanted in (_normalize(preset.key), _normalize(preset.name)):
            return preset
    if wanted in _ALIASES:
        return PRESETS[_ALIASES[wanted]]

    available = list(PRESETS.keys())
    raise KeyError(f"Unknown preset '{key}'. Available: {available}")


def list_presets() -> List[str]:
    """List available preset keys."""
    return list(PRESETS.keys())


def preset_inputs(key: str, **kwargs: Any) -> ClimateInputs:
    """Shorthand for ``get_preset(key).inputs(**kwargs)``."""
    return get_preset(key).inputs(**kwargs)
