from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class IndexResult:
    """Per-pixel index values plus statistics over the valid (non-NaN) pixels.

    ``data`` is a flat float32 array; pixels that were no-data in any input
    band hold NaN. When no pixel is valid the four statistics are NaN.
    """

    data: np.ndarray
    min: float
    max: float
    mean: float
    std_dev: float
    valid_count: int = 0
    width: Optional[int] = None
    height: Optional[int] = None
    name: Optional[str] = None

    def __len__(self) -> int:
        return self.data.size

    @property
    def has_valid(self) -> bool:
        return self.valid_count > 0

    def as_2d(self) -> np.ndarray:
        """Return ``data`` reshaped to ``(height, width)``."""
        if self.width is None or self.height is None:
            raise ValueError("IndexResult has no raster dimensions")
        return self.data.reshape(self.height, self.width)

    def to_dict(self) -> Dict[str, float | int | str | None]:
        """Return the statistics (not the pixel data) as a plain dict."""
        return {
            "index": self.name,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "valid_count": self.valid_count,
            "pixel_count": self.data.size,
        }


@dataclass(frozen=True)
class MaskStatistics:
    """Extent of the positive class of a binary mask."""

    pixel_count: int
    area: float
    percentage: float

    def to_dict(self) -> Dict[str, float | int]:
        return {
            "pixel_count": self.pixel_count,
            "area": self.area,
            "percentage": self.percentage,
        }


@dataclass
class SummaryTable:
    """Rows of scene-level summaries, one per analysed index."""

    rows: List[Dict]

    def to_dataframe(self) -> pd.DataFrame:
        """Return the summaries as a DataFrame."""
        return pd.DataFrame(self.rows)

    def to_csv(self, path: str) -> None:
        """Write the summaries to CSV."""
        self.to_dataframe().to_csv(path, index=False)
