"""Thresholding and statistics over computed index rasters."""

from .results import IndexResult, MaskStatistics, SummaryTable
from .stats import calculate_mask_statistics, describe_valid, summarize_index
from .threshold import THRESHOLD_MODES, apply_threshold, calculate_otsu_threshold

__all__ = [
    "IndexResult",
    "MaskStatistics",
    "SummaryTable",
    "calculate_mask_statistics",
    "describe_valid",
    "summarize_index",
    "THRESHOLD_MODES",
    "apply_threshold",
    "calculate_otsu_threshold",
]
