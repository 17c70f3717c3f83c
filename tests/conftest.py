"""Pytest configuration."""
import logging

import matplotlib
import pytest

matplotlib.use("Agg")

from milankovic import ClimateInputs, OrbitalState  # noqa: E402
from milankovic.core.inputs import Atmosphere  # noqa: E402


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("milankovic")
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def present_day():
    """Present-day orbit and 415 ppm CO2 at s = 0.5, equilibrium response."""
    return ClimateInputs(
        orbit=OrbitalState.present_day(),
        atmosphere=Atmosphere(co2=415.0),
        season=0.5,
    )


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the default config location at a temporary directory."""
    path = tmp_path / "home" / ".milankovic" / "config.yaml"
    monkeypatch.setattr("milankovic.utils.config.DEFAULT_CONFIG_PATH", path)
    return path
