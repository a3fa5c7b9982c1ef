# pylint: disable=missing-module-docstring,missing-function-docstring,redefined-outer-name
import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin

from belemsat.ingestion.bands import BandData


def write_raster(path, data, nodata=None, dtype="float32"):
    """Write a single-band GeoTIFF with a 10 m UTM grid."""
    data = np.asarray(data)
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=data.shape[0],
        width=data.shape[1],
        count=1,
        dtype=dtype,
        crs="EPSG:31982",
        transform=from_origin(780000, 9850000, 10, 10),
        nodata=nodata,
    ) as dst:
        dst.write(data.astype(dtype), 1)
    return str(path)


@pytest.fixture
def make_raster():
    """Return the GeoTIFF writer helper."""
    return write_raster


@pytest.fixture
def water_scene():
    """2x3 scene: left column water, middle mixed, right column vegetation."""
    green = BandData.from_array([[0.30, 0.10, 0.05], [0.25, 0.12, 0.04]])
    nir = BandData.from_array([[0.05, 0.10, 0.40], [0.04, 0.11, 0.45]])
    return {"green": green, "nir": nir}


@pytest.fixture
def band_files(tmp_path):
    """Sentinel-2-like DN rasters with 0 as nodata in one corner."""
    green = np.array([[3000, 1000, 500], [2500, 1200, 0]], dtype="uint16")
    nir = np.array([[500, 1000, 4000], [400, 1100, 4500]], dtype="uint16")
    return {
        "green": write_raster(tmp_path / "B03.tif", green, nodata=0, dtype="uint16"),
        "nir": write_raster(tmp_path / "B08.tif", nir, nodata=0, dtype="uint16"),
    }
