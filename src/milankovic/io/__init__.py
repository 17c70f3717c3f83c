"""Input/Output operations for milankovic."""

from milankovic.io.csv_writer import write_region_csv, write_seasonal_csv, write_sweep_csv
from milankovic.io.netcdf_writer import write_region_netcdf, write_seasonal_netcdf

__all__ = [
    "write_region_csv",
    "write_seasonal_csv",
    "write_sweep_csv",
    "write_region_netcdf",
    "write_seasonal_netcdf",
]
