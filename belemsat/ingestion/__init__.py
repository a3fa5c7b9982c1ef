"""Band loading, unit conversions and spectral index computation."""

from .bands import BandData, DimensionMismatchError, check_aligned
from .calibration import dn_to_reflectance, linear_to_db
from .indices import (
    INDEX_REGISTRY,
    compute_index,
    compute_ndmi,
    compute_ndvi,
    compute_ndwi,
    compute_sar_db,
    normalized_difference,
)

__all__ = [
    "BandData",
    "DimensionMismatchError",
    "check_aligned",
    "dn_to_reflectance",
    "linear_to_db",
    "INDEX_REGISTRY",
    "compute_index",
    "compute_ndmi",
    "compute_ndvi",
    "compute_ndwi",
    "compute_sar_db",
    "normalized_difference",
]
