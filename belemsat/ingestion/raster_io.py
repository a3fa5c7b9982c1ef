from __future__ import annotations

"""GeoTIFF reading and writing for bands, index rasters and masks."""

from typing import Optional
import logging

import numpy as np
import rasterio

from belemsat.analytics.results import IndexResult
from .bands import BandData


def read_band(path: str, band: int = 1) -> BandData:
    """Read one band of *path* as a :class:`BandData` carrying its nodata."""
    with rasterio.open(path) as src:
        arr = src.read(band).astype(np.float32)
        return BandData(arr, width=src.width, height=src.height, nodata=src.nodata)


def read_profile(path: str) -> dict:
    """Return the rasterio profile of *path* (CRS, transform, size)."""
    with rasterio.open(path) as src:
        return dict(src.profile)


def _write(path: str, arr: np.ndarray, profile: Optional[dict], **overrides) -> None:
    height, width = arr.shape
    out_profile = dict(profile or {})
    out_profile.update(
        driver="GTiff",
        height=height,
        width=width,
        count=1,
        compress="deflate",
        **overrides,
    )
    with rasterio.open(path, "w", **out_profile) as dst:
        dst.write(arr, 1)


def write_index(
    result: IndexResult,
    path: str,
    profile: Optional[dict] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Write *result* as a float32 GeoTIFF with NaN as nodata.

    ``profile`` is usually taken from one of the source bands so that the
    output keeps their CRS and transform.
    """
    logger = logger or logging.getLogger(__name__)
    _write(path, result.as_2d(), profile, dtype="float32", nodata=float("nan"))
    logger.info("✔ Wrote %s raster: %s", result.name or "index", path)


def write_mask(
    mask: np.ndarray,
    width: int,
    height: int,
    path: str,
    profile: Optional[dict] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Write a 0/1 mask as a uint8 GeoTIFF."""
    logger = logger or logging.getLogger(__name__)
    arr = np.asarray(mask, dtype=np.uint8).reshape(height, width)
    _write(path, arr, profile, dtype="uint8", nodata=None)
    logger.info("✔ Wrote mask: %s", path)
