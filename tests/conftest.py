"""
Root conftest.py - fixtures shared across all tests.

Provides sample products covering every element type and a factory for
hand-written netCDF files, used to feed the reader malformed input.
"""

from pathlib import Path
import sys

import numpy as np
import pytest

# Make the src/ layout importable when the package is not installed
HARPNC_SRC_DIR = Path(__file__).parent.parent.resolve() / "src"
if str(HARPNC_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(HARPNC_SRC_DIR))

from harpnc.product import DataType, DimensionType, Product, Variable  # noqa: E402

T = DimensionType


@pytest.fixture()
def nc_path(tmp_path):
    """Destination path for an exported product."""
    return tmp_path / "product.nc"


@pytest.fixture()
def pressure_product():
    """Single double variable over a named time axis."""
    return Product([
        Variable("pressure", DataType.DOUBLE, [T.TIME], [3], [1.0, 2.0, 3.0], unit="hPa"),
    ])


@pytest.fixture()
def sample_product():
    """One variable of each element type over named and independent axes."""
    return Product(
        [
            Variable("flag", DataType.INT8, [T.TIME], [3], [-1, 0, 1],
                     description="quality flag", valid_min=-1, valid_max=1),
            Variable("counts", DataType.INT16, [T.TIME, T.INDEPENDENT], [3, 5],
                     np.arange(15, dtype=np.int16).reshape(3, 5), unit="1"),
            Variable("grid_index", DataType.INT32, [T.LATITUDE, T.LONGITUDE], [2, 4],
                     np.arange(8, dtype=np.int32) - 4),
            Variable("weights", DataType.FLOAT, [T.INDEPENDENT], [5],
                     np.array([0.5, -0.25, np.inf, 1e-30, 7.0], dtype=np.float32),
                     valid_min=0.0),
            Variable("pressure", DataType.DOUBLE, [T.TIME], [3], [1013.25, np.nan, -0.0],
                     unit="hPa", description="surface pressure", valid_max=1100.0),
            Variable("station", DataType.STRING, [T.TIME], [3], ["a", "bb", "ccc"],
                     description="station name"),
        ],
        source_product="S5P_L2_NO2_20260101.nc",
        history="2026-01-01 harpnc copy",
    )


@pytest.fixture()
def raw_dataset(tmp_path):
    """
    Factory writing a netCDF file by hand.

    ``raw_dataset(build, name='raw.nc', format='NETCDF3_CLASSIC')`` opens a
    new dataset, calls ``build(ds)`` and returns the file path.
    """
    netCDF4 = pytest.importorskip("netCDF4")

    def _make(build, name="raw.nc", format="NETCDF3_CLASSIC", conventions="HARP-1.0"):
        path = tmp_path / name
        with netCDF4.Dataset(str(path), "w", format=format) as ds:
            ds.set_auto_maskandscale(False)
            if conventions is not None:
                ds.setncattr("Conventions", conventions)
            build(ds)
        return path

    return _make
