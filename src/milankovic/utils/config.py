"""Configuration management for milankovic."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from milankovic.core.constants import (
    CLIMATE_SENSITIVITY,
    DEFAULT_LATITUDE,
    DEFAULT_SEASON,
    DEFAULT_SENSITIVITY_LEVEL,
    DEFAULT_TEMP_OFFSET,
    DEFAULT_TIME_SCALE_YEARS,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".milankovic" / "config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "model": {
        "latitude": DEFAULT_LATITUDE,
        "season": DEFAULT_SEASON,
        "temp_offset": DEFAULT_TEMP_OFFSET,
        "time_scale_years": DEFAULT_TIME_SCALE_YEARS,
        "sensitivity_level": DEFAULT_SENSITIVITY_LEVEL,
    },
    "seasonal_cycle": {
        "n_seasons": 48,
    },
    "outputs": {
        "formats": ["csv", "netcdf", "png"],
        "base_dir": "./outputs",
        "subdirs": {
            "csv": "csv",
            "netcdf": "netcdf",
            "png": "png",
        },
    },
    "logging": {
        "level": "WARNING",
        "log_dir": None,
        "format_style": "simple",
    },
    "visualization": {
        "dpi": 150,
    },
}


def _resolve(config_path: Optional[Union[str, Path]]) -> Path:
    return DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    create_default: bool = False,
) -> Dict[str, Any]:
    """
    Load configuration from a YAML file merged over the defaults.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to config file. Defaults to ~/.milankovic/config.yaml
    create_default : bool, optional
        Write the default config when the file does not exist.

    Returns
    -------
    dict
        Configuration dictionary.

    Raises
    ------
    ValueError
        If the file is not a YAML mapping or a model setting is invalid.
    """
    path = _resolve(config_path)

    if not path.exists():
        if create_default:
            save_config(DEFAULT_CONFIG, path)
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.info(f"Loading config from: {path}")
    with open(path, "r") as f:
        user_config = yaml.safe_load(f)

    if user_config is None:
        user_config = {}
    if not isinstance(user_config, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(user_config).__name__}")

    config = _deep_merge(DEFAULT_CONFIG, user_config)
    _validate(config)
    return config


def save_config(
    config: Dict[str, Any],
    config_path: Optional[Union[str, Path]] = None,
) -> Path:
    """Write ``config`` as YAML and return the path written."""
    path = _resolve(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Config saved to: {path}")
    return path


def model_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """The ``model`` section as ClimateInputs keyword arguments."""
    settings = config.get("model", {})
    return {key: settings[key] for key in DEFAULT_CONFIG["model"] if key in settings}


def _validate(config: Dict[str, Any]) -> None:
    model = config.get("model", {})
    level = model.get("sensitivity_level")
    if level not in CLIMATE_SENSITIVITY:
        raise ValueError(
            f"model.sensitivity_level must be one of {sorted(CLIMATE_SENSITIVITY)}, got {level!r}"
        )
    for key in ("latitude", "season", "temp_offset", "time_scale_years"):
        value = model.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"model.{key} must be a number, got {value!r}")
    if model.get("time_scale_years", 0) < 0:
        raise ValueError("model.time_scale_years must be >= 0")

    n_seasons = config.get("seasonal_cycle", {}).get("n_seasons", 1)
    if isinstance(n_seasons, bool) or not isinstance(n_seasons, int) or n_seasons < 1:
        raise ValueError(f"seasonal_cycle.n_seasons must be an integer >= 1, got {n_seasons!r}")


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries without mutating either."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
