"""NetCDF output writers (CF-style metadata)."""

from typing import TYPE_CHECKING, Any, Dict, Optional, Union
from pathlib import Path
from datetime import datetime
import logging
import numpy as np

from milankovic import __version__

if TYPE_CHECKING:
    from milankovic.core.inputs import ClimateInputs
    from milankovic.core.results import RegionResult, SeasonalCycleResults

logger = logging.getLogger(__name__)


def _global_attributes(ds, title: str, name: Optional[str], inputs: Optional["ClimateInputs"]) -> None:
    ds.title = title
    ds.institution = "milankovic"
    ds.source = f"milankovic climate response model v{__version__}"
    ds.history = f"Created {datetime.now().isoformat()} by milankovic"
    ds.Conventions = "CF-1.8"
    ds.scenario = name or "Custom"

    if inputs is None:
        return
    for key, value in inputs.to_dict().items():
        if key == "latitude" or value is None:
            continue
        # netCDF attributes cannot hold booleans or None
        setattr(ds, f"input_{key}", value if isinstance(value, str) else float(value))


def _add_band_coordinates(ds, latitudes, names, weights, comp_kwargs: Dict[str, Any]) -> None:
    ds.createDimension("band", len(latitudes))

    lat_var = ds.createVariable("latitude", "f8", ("band",), **comp_kwargs)
    lat_var.units = "degrees_north"
    lat_var.standard_name = "latitude"
    lat_var.long_name = "Band centre latitude"
    lat_var[:] = np.asarray(latitudes, dtype=np.float64)

    weight_var = ds.createVariable("weight", "f8", ("band",), **comp_kwargs)
    weight_var.units = "1"
    weight_var.long_name = "Area weight of the band"
    weight_var[:] = np.asarray(weights, dtype=np.float64)

    name_var = ds.createVariable("band_name", str, ("band",))
    name_var.long_name = "Band name"
    for i, name in enumerate(names):
        name_var[i] = name


def write_region_netcdf(
    results: "RegionResult",
    filepath: Union[str, Path],
    compression: bool = True,
    compression_level: int = 4,
) -> None:
    """
    Write a banded field to NetCDF.

    Each PointResult field becomes a variable on the ``band`` dimension; the
    global mean is stored as a global attribute and a scalar variable.

    Parameters
    ----------
    results : RegionResult
        Regional evaluation to export.
    filepath : str or Path
        Output file path.
    compression : bool, optional
        Enable zlib compression. Default is True.
    compression_level : int, optional
        Compression level (1-9). Default is 4.
    """
    import netCDF4 as nc

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Writing NetCDF to: {filepath}")

    comp_kwargs = {"zlib": True, "complevel": compression_level} if compression else {}

    with nc.Dataset(filepath, "w", format="NETCDF4") as ds:
        _global_attributes(ds, "Climate Response Model latitude bands", results.name, results.inputs)
        ds.global_temperature = float(results.global_temperature)
        ds.is_fallback = int(results.is_fallback)

        _add_band_coordinates(
            ds,
            results.latitudes,
            [b.name for b in results.bands],
            [b.weight for b in results.bands],
            comp_kwargs,
        )

        temp_var = ds.createVariable("temperature", "f8", ("band",), **comp_kwargs)
        temp_var.units = "degC"
        temp_var.long_name = "Surface air temperature"
        temp_var.valid_range = np.array([-60.0, 60.0])
        temp_var[:] = results.temperatures

        ice_var = ds.createVariable("ice_factor", "f8", ("band",), **comp_kwargs)
        ice_var.units = "1"
        ice_var.long_name = "Ice cover fraction"
        ice_var.valid_range = np.array([0.0, 1.0])
        ice_var[:] = results.ice_factors

        base_var = ds.createVariable("base_temperature", "f8", ("band",), **comp_kwargs)
        base_var.units = "degC"
        base_var.long_name = "Baseline temperature of the latitude"
        base_var[:] = np.array([b.result.base_temperature for b in results.bands])

        for effect in results.bands[0].result.EFFECT_NAMES:
            var = ds.createVariable(effect, "f8", ("band",), **comp_kwargs)
            var.units = "K"
            var.long_name = effect.replace("_", " ").capitalize() + " contribution"
            var[:] = np.array([getattr(b.result, effect) for b in results.bands])

        err_var = ds.createVariable("calculation_error", "i2", ("band",), **comp_kwargs)
        err_var.units = "1"
        err_var.flag_values = np.array([0, 1], dtype=np.int16)
        err_var.flag_meanings = "ok fallback"
        err_var[:] = np.array([int(b.result.calculation_error) for b in results.bands], dtype=np.int16)

        global_var = ds.createVariable("global_temperature", "f8")
        global_var.units = "degC"
        global_var.long_name = "Weighted global mean temperature"
        global_var.assignValue(float(results.global_temperature))

    logger.info(f"NetCDF written: {len(results.bands)} bands")


def write_seasonal_netcdf(
    results: "SeasonalCycleResults",
    filepath: Union[str, Path],
    compression: bool = True,
    compression_level: int = 4,
) -> None:
    """Write a seasonal cycle to NetCDF on (season, band) dimensions."""
    import netCDF4 as nc

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Writing NetCDF to: {filepath}")

    comp_kwargs = {"zlib": True, "complevel": compression_level} if compression else {}

    with nc.Dataset(filepath, "w", format="NETCDF4") as ds:
        _global_attributes(ds, "Climate Response Model seasonal cycle", results.name, results.inputs)
        ds.annual_mean_temperature = results.annual_mean

        ds.createDimension("season", results.n_seasons)
        _add_band_coordinates(ds, results.latitude, results.band_names, results.weight, comp_kwargs)

        season_var = ds.createVariable("season", "f8", ("season",), **comp_kwargs)
        season_var.units = "1"
        season_var.long_name = "Fraction of the year"
        season_var.valid_range = np.array([0.0, 1.0])
        season_var[:] = results.season

        temp_var = ds.createVariable("temperature", "f8", ("season", "band"), **comp_kwargs)
        temp_var.units = "degC"
        temp_var.long_name = "Surface air temperature"
        temp_var[:, :] = results.temperature

        ice_var = ds.createVariable("ice_factor", "f8", ("season", "band"), **comp_kwargs)
        ice_var.units = "1"
        ice_var.long_name = "Ice cover fraction"
        ice_var[:, :] = results.ice_factor

        err_var = ds.createVariable("calculation_error", "i2", ("season", "band"), **comp_kwargs)
        err_var.units = "1"
        err_var.flag_values = np.array([0, 1], dtype=np.int16)
        err_var.flag_meanings = "ok fallback"
        err_var[:, :] = results.calculation_error.astype(np.int16)

        global_var = ds.createVariable("global_temperature", "f8", ("season",), **comp_kwargs)
        global_var.units = "degC"
        global_var.long_name = "Weighted global mean temperature"
        global_var[:] = results.global_temperature

    logger.info(f"NetCDF written: {results.n_seasons} seasons x {len(results.latitude)} bands")
