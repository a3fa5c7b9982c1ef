# belemsat/analytics/stats.py

import math

import numpy as np

from belemsat.core.logger import Logger
from .results import IndexResult, MaskStatistics


logger = Logger.get_logger(__name__)

_NAN = float("nan")


def describe_valid(values) -> tuple[float, float, float, float, int]:
    """Return ``(min, max, mean, std_dev, count)`` over the non-NaN *values*.

    The standard deviation is the population one, computed in a second pass
    over deviations from the mean. With no valid value every statistic is
    NaN and the count is 0.
    """
    arr = np.asarray(values, dtype=np.float64).ravel()
    valid = arr[~np.isnan(arr)]
    count = int(valid.size)
    if count == 0:
        return _NAN, _NAN, _NAN, _NAN, 0

    min_val = float(valid.min())
    max_val = float(valid.max())
    mean_val = float(valid.sum()) / count
    variance = float(np.square(valid - mean_val).sum())
    std_val = math.sqrt(variance / count)
    # summation rounding can push the mean a hair outside [min, max]
    mean_val = min(max(mean_val, min_val), max_val)
    return min_val, max_val, mean_val, std_val, count


def calculate_mask_statistics(mask, pixel_size: float = 10.0) -> MaskStatistics:
    """Count, area and share of pixels where *mask* equals 1.

    ``area`` is in squared units of ``pixel_size``. An empty mask reports a
    percentage of 0.
    """
    arr = np.asarray(mask).ravel()
    pixel_count = int(np.count_nonzero(arr == 1))
    area = pixel_count * pixel_size * pixel_size
    if arr.size == 0:
        logger.debug("Empty mask; reporting 0%% coverage")
        percentage = 0.0
    else:
        percentage = pixel_count / arr.size * 100
    return MaskStatistics(pixel_count=pixel_count, area=area, percentage=percentage)


def summarize_index(
    result: IndexResult,
    mask_stats: MaskStatistics | None = None,
    **extra,
) -> dict[str, float | int | str | None]:
    """Flatten an index result (and optional mask statistics) into one row."""
    row: dict[str, float | int | str | None] = dict(extra)
    row.update(result.to_dict())
    if mask_stats is not None:
        row.update(
            {
                "mask_pixel_count": mask_stats.pixel_count,
                "mask_area": mask_stats.area,
                "mask_percentage": mask_stats.percentage,
            }
        )
    return row
