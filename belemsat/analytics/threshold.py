"""Binary masks from continuous index rasters, with fixed or Otsu thresholds."""

import numpy as np

from belemsat.core.constants import OTSU_BINS
from .results import IndexResult

THRESHOLD_MODES = ("above", "below")


def _as_values(index) -> np.ndarray:
    if isinstance(index, IndexResult):
        return index.data.astype(np.float64)
    return np.asarray(index, dtype=np.float64)


def apply_threshold(index, threshold: float, mode: str = "above") -> np.ndarray:
    """Return a ``uint8`` mask, 1 where the value is strictly past *threshold*.

    ``mode="above"`` keeps ``value > threshold``; ``mode="below"`` keeps
    ``value < threshold``. A value equal to the threshold is 0 in both modes
    and NaN pixels are always 0. The mask has the shape of the input values.
    """
    if mode not in THRESHOLD_MODES:
        raise ValueError(
            f"Threshold mode '{mode}' not supported. Choose from: {list(THRESHOLD_MODES)}"
        )
    values = _as_values(index)
    # NaN compares False, so invalid pixels fall out as 0
    if mode == "above":
        hits = values > threshold
    else:
        hits = values < threshold
    return hits.astype(np.uint8)


def calculate_otsu_threshold(values) -> float:
    """Find the threshold maximising between-class variance (Otsu's method).

    Finite values are binned into a 256-bin histogram spanning their
    ``[min, max]``. The winning bin is mapped back to data units as
    ``min + bin / 255 * range``. When several adjacent bins share the
    maximum variance (two well separated modes with empty bins between
    them) the middle of that run is used.

    Returns 0.0 when there is no finite value and ``min`` when all values
    are equal.
    """
    arr = _as_values(values).ravel()
    valid = arr[np.isfinite(arr)]
    if valid.size == 0:
        return 0.0

    lo = float(valid.min())
    hi = float(valid.max())
    value_range = hi - lo
    if value_range == 0:
        return lo

    top = OTSU_BINS - 1
    bins = np.minimum(top, np.floor((valid - lo) / value_range * top).astype(np.int64))
    histogram = np.bincount(bins, minlength=OTSU_BINS).astype(np.float64)
    levels = np.arange(OTSU_BINS, dtype=np.float64)

    total = float(valid.size)
    sum_total = float((levels * histogram).sum())
    weight_bg = np.cumsum(histogram)
    sum_bg = np.cumsum(levels * histogram)
    weight_fg = total - weight_bg

    # bins before the first sample have no background; from the last
    # occupied bin on there is no foreground
    usable = (weight_bg > 0) & (weight_fg > 0)
    variance = np.zeros(OTSU_BINS, dtype=np.float64)
    w_bg = weight_bg[usable]
    w_fg = weight_fg[usable]
    mean_bg = sum_bg[usable] / w_bg
    mean_fg = (sum_total - sum_bg[usable]) / w_fg
    variance[usable] = w_bg * w_fg * (mean_bg - mean_fg) ** 2

    best = float(variance.max())
    if best <= 0:
        level = 0.0
    else:
        first = int(np.argmax(variance))
        last = first
        while last + 1 < OTSU_BINS and variance[last + 1] == best:
            last += 1
        level = (first + last) / 2.0

    return lo + (level / top) * value_range
