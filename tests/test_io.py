"""Tests for CSV, NetCDF and PNG output."""

import netCDF4 as nc
import numpy as np
import pandas as pd
import pytest

from milankovic import regional_temperatures, seasonal_cycle
from milankovic.core.model import co2_sweep
from milankovic.io import write_sweep_csv


@pytest.fixture
def region(present_day):
    return regional_temperatures(present_day, name="Present")


@pytest.fixture
def cycle(present_day):
    return seasonal_cycle(present_day, n_seasons=6, name="Present")


class TestCSV:
    def test_region(self, region, tmp_path):
        path = tmp_path / "csv" / "present_bands.csv"
        region.to_csv(path)
        df = pd.read_csv(path)
        assert len(df) == 7
        assert df["band"].iloc[0] == "North Pole"
        np.testing.assert_allclose(df["temperature"], region.temperatures, atol=1e-6)
        np.testing.assert_allclose(df["global_temperature"], region.global_temperature, atol=1e-6)

    def test_seasonal(self, cycle, tmp_path):
        path = tmp_path / "present_seasonal.csv"
        cycle.to_csv(path)
        df = pd.read_csv(path)
        assert len(df) == 6 * 7
        assert set(df.columns) >= {"season", "band", "temperature", "ice_factor", "calculation_error"}

    def test_sweep(self, present_day, tmp_path):
        path = tmp_path / "sweep.csv"
        write_sweep_csv(co2_sweep(present_day, [280.0, 560.0]), path)
        df = pd.read_csv(path)
        assert list(df["co2"]) == [280.0, 560.0]


class TestNetCDF:
    def test_region(self, region, tmp_path):
        path = tmp_path / "present_bands.nc"
        region.to_netcdf(path)
        with nc.Dataset(path) as ds:
            assert ds.dimensions["band"].size == 7
            np.testing.assert_allclose(ds.variables["temperature"][:], region.temperatures)
            np.testing.assert_allclose(ds.variables["latitude"][:], region.latitudes)
            assert ds.variables["band_name"][3] == "Equator"
            assert "co2_effect" in ds.variables
            assert ds.scenario == "Present"
            assert ds.input_co2 == pytest.approx(415.0)
            assert float(ds.variables["global_temperature"][...]) == pytest.approx(region.global_temperature)

    def test_seasonal(self, cycle, tmp_path):
        path = tmp_path / "present_seasonal.nc"
        cycle.to_netcdf(path, compression=False)
        with nc.Dataset(path) as ds:
            assert ds.variables["temperature"].shape == (6, 7)
            np.testing.assert_allclose(ds.variables["season"][:], cycle.season)
            np.testing.assert_allclose(ds.variables["global_temperature"][:], cycle.global_temperature)


class TestPNG:
    def test_profile(self, region, tmp_path):
        path = tmp_path / "png" / "present_profile.png"
        region.to_png(path, dpi=50)
        assert path.exists()
        assert path.stat().st_size > 0

    def test_seasonal(self, cycle, tmp_path):
        path = tmp_path / "present_seasonal.png"
        cycle.to_png(path, dpi=50)
        assert path.exists()

    def test_comparison(self, region, present_day, tmp_path):
        from milankovic.visualization import create_comparison_plot

        other = regional_temperatures(present_day.with_co2(560.0), name="Doubled")
        path = tmp_path / "compare.png"
        create_comparison_plot([region, other], path, dpi=50)
        assert path.exists()
