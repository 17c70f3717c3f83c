"""CSV output writers."""

from typing import TYPE_CHECKING, Union
from pathlib import Path
import logging

if TYPE_CHECKING:
    import pandas as pd
    from milankovic.core.results import RegionResult, SeasonalCycleResults

logger = logging.getLogger(__name__)


def _prepare(filepath: Union[str, Path]) -> Path:
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    return filepath


def write_region_csv(
    results: "RegionResult",
    filepath: Union[str, Path],
    float_format: str = "%.6f",
) -> None:
    """
    Write a banded field to CSV, one row per latitude band.

    Columns are the band name, latitude and weight followed by every
    PointResult field, plus the global mean repeated on every row.

    Parameters
    ----------
    results : RegionResult
        Regional evaluation to export.
    filepath : str or Path
        Output file path.
    float_format : str, optional
        Float format string. Default is "%.6f".
    """
    filepath = _prepare(filepath)
    logger.info(f"Writing CSV to: {filepath}")

    df = results.to_dataframe()
    df["global_temperature"] = results.global_temperature
    df.to_csv(filepath, index=False, float_format=float_format)

    logger.info(f"CSV written: {len(results.bands)} bands, global mean {results.global_temperature:.2f} °C")


def write_seasonal_csv(
    results: "SeasonalCycleResults",
    filepath: Union[str, Path],
    float_format: str = "%.6f",
) -> None:
    """Write a seasonal cycle to CSV in long format (one row per season and band)."""
    filepath = _prepare(filepath)
    logger.info(f"Writing CSV to: {filepath}")

    df = results.to_dataframe()
    df.to_csv(filepath, index=False, float_format=float_format)

    logger.info(f"CSV written: {len(df)} rows, {results.n_seasons} seasons")


def write_sweep_csv(
    sweep: "pd.DataFrame",
    filepath: Union[str, Path],
    float_format: str = "%.6f",
) -> None:
    """Write a CO2 sweep table to CSV."""
    filepath = _prepare(filepath)
    logger.info(f"Writing CSV to: {filepath}")
    sweep.to_csv(filepath, index=False, float_format=float_format)
    logger.info(f"CSV written: {len(sweep)} CO2 levels")
