from __future__ import annotations

"""In-memory raster band container and alignment checks."""

from dataclasses import dataclass
from typing import Optional

import numpy as np


class DimensionMismatchError(ValueError):
    """Raised when bands combined in one operation do not share a shape."""


@dataclass(frozen=True, eq=False)
class BandData:
    """One raster band stored as a flat, read-only float32 array.

    ``data`` is row-major with ``width * height`` samples. Any sample equal
    to ``nodata`` is treated as missing by the index routines.
    """

    data: np.ndarray
    width: int
    height: int
    nodata: Optional[float] = None

    def __post_init__(self) -> None:
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise DimensionMismatchError(
                f"Band dimensions must be positive, got {self.width}x{self.height}"
            )
        arr = np.array(self.data, dtype=np.float32).ravel()
        if arr.size != int(self.width) * int(self.height):
            raise DimensionMismatchError(
                f"dimension mismatch: {arr.size} samples for a "
                f"{self.width}x{self.height} band"
            )
        arr.setflags(write=False)
        object.__setattr__(self, "data", arr)
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))

    @classmethod
    def from_array(cls, array, nodata: Optional[float] = None) -> "BandData":
        """Build a band from a 2-D ``(height, width)`` array."""
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise DimensionMismatchError(
                f"Expected a 2-D array, got {arr.ndim} dimension(s)"
            )
        height, width = arr.shape
        return cls(arr, width=width, height=height, nodata=nodata)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def __len__(self) -> int:
        return self.data.size

    def nodata_mask(self) -> np.ndarray:
        """Boolean array, True where the sample equals the nodata sentinel."""
        if self.nodata is None:
            return np.zeros(self.data.size, dtype=bool)
        if np.isnan(self.nodata):
            return np.isnan(self.data)
        return self.data == np.float32(self.nodata)

    def as_2d(self) -> np.ndarray:
        return self.data.reshape(self.height, self.width)


def check_aligned(*bands: BandData) -> None:
    """Raise :class:`DimensionMismatchError` unless all *bands* share a shape."""
    if not bands:
        return
    first = bands[0]
    for other in bands[1:]:
        if len(other) != len(first) or other.shape != first.shape:
            raise DimensionMismatchError(
                "dimension mismatch: "
                f"{first.width}x{first.height} ({len(first)} samples) vs "
                f"{other.width}x{other.height} ({len(other)} samples)"
            )
