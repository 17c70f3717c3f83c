"""
Built-in paleoclimate presets.
"""

from milankovic.scenarios.presets import (
    PARAMETER_RANGES,
    PRESETS,
    Preset,
    get_preset,
    list_presets,
    preset_inputs,
)

__all__ = [
    "PARAMETER_RANGES",
    "PRESETS",
    "Preset",
    "get_preset",
    "list_presets",
    "preset_inputs",
]
