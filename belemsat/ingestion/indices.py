"""
Module `ingestion.indices` computes normalized-difference spectral indices
from in-memory bands. Index metadata (band roles, display palette, rescale
range, default threshold mode) is read from `resources/index_formulas.json`.
"""

import json
from pathlib import Path
from typing import Mapping

import numpy as np

from belemsat.analytics.results import IndexResult
from belemsat.analytics.stats import describe_valid
from belemsat.core.constants import NDI_EPSILON
from belemsat.core.logger import Logger
from .bands import BandData, check_aligned
from .calibration import linear_to_db

logger = Logger.get_logger(__name__)

_FORMULA_PATH = (
    Path(__file__).resolve().parent.parent / "resources" / "index_formulas.json"
)
with open(_FORMULA_PATH, "r", encoding="utf-8") as _f:
    INDEX_REGISTRY = json.load(_f)


def _build_result(
    values: np.ndarray, band: BandData, name: str | None
) -> IndexResult:
    min_val, max_val, mean_val, std_val, count = describe_valid(values)
    result = IndexResult(
        data=values.astype(np.float32),
        min=min_val,
        max=max_val,
        mean=mean_val,
        std_dev=std_val,
        valid_count=count,
        width=band.width,
        height=band.height,
        name=name,
    )
    if not result.has_valid:
        logger.warning(
            "No valid pixels for %s (%dx%d); statistics are NaN",
            name or "index",
            band.width,
            band.height,
        )
    return result


def normalized_difference(
    a: BandData, b: BandData, name: str | None = None
) -> IndexResult:
    """
    Compute ``(a - b) / (a + b + NDI_EPSILON)`` per pixel.

    Pixels where either band holds its nodata value become NaN and are left
    out of the statistics.

    Raises:
        DimensionMismatchError: if the bands differ in shape.
    """
    check_aligned(a, b)
    invalid = a.nodata_mask() | b.nodata_mask()
    av = a.data.astype(np.float64)
    bv = b.data.astype(np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        values = (av - bv) / (av + bv + NDI_EPSILON)
    values[invalid] = np.nan
    return _build_result(values, a, name)


def compute_ndwi(green: BandData, nir: BandData) -> IndexResult:
    """Normalized Difference Water Index: (green - nir) / (green + nir)."""
    return normalized_difference(green, nir, name="ndwi")


def compute_ndvi(nir: BandData, red: BandData) -> IndexResult:
    """Normalized Difference Vegetation Index: (nir - red) / (nir + red)."""
    return normalized_difference(nir, red, name="ndvi")


def compute_ndmi(nir: BandData, swir: BandData) -> IndexResult:
    """Normalized Difference Moisture Index: (nir - swir) / (nir + swir)."""
    return normalized_difference(nir, swir, name="ndmi")


def compute_sar_db(vv: BandData) -> IndexResult:
    """Radar backscatter converted to dB, with nodata pixels set to NaN."""
    values = linear_to_db(vv.data)
    values[vv.nodata_mask()] = np.nan
    return _build_result(values, vv, "sar")


_COMPUTERS = {
    "ndwi": compute_ndwi,
    "ndvi": compute_ndvi,
    "ndmi": compute_ndmi,
    "sar": compute_sar_db,
}


def compute_index(index: str, bands: Mapping[str, BandData]) -> IndexResult:
    """
    Compute a named index from a mapping of band role to band.

    Args:
        index: one of the keys in INDEX_REGISTRY (case-insensitive).
        bands: band roles as listed in the registry entry, e.g.
            ``{"green": ..., "nir": ...}`` for NDWI.
    """
    key = index.lower()
    if key not in INDEX_REGISTRY:
        raise ValueError(
            f"Index '{index}' not supported. Choose from: {list(INDEX_REGISTRY)}"
        )
    roles = INDEX_REGISTRY[key]["bands"]
    missing = [role for role in roles if role not in bands]
    if missing:
        raise ValueError(f"Index '{key}' needs bands {roles}; missing {missing}")
    return _COMPUTERS[key](*(bands[role] for role in roles))
