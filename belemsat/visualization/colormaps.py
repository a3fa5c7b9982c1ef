from __future__ import annotations

"""Discrete color ramps used to display index rasters."""

from typing import Dict, List, Tuple

import numpy as np
from matplotlib.colors import ListedColormap

from belemsat.ingestion.bands import BandData, check_aligned

RGB = Tuple[int, int, int]


class UnknownColormapError(ValueError):
    """Raised when a palette name is not one of :data:`COLORMAPS`."""


# Sequential ramps (blues, viridis, plasma) run light-to-dark or
# dark-to-light; rdylgn diverges from red through yellow to green.
COLORMAPS: Dict[str, Tuple[RGB, ...]] = {
    "blues": (
        (247, 251, 255),
        (222, 235, 247),
        (198, 219, 239),
        (158, 202, 225),
        (107, 174, 214),
        (66, 146, 198),
        (33, 113, 181),
        (8, 81, 156),
        (8, 48, 107),
    ),
    "rdylgn": (
        (165, 0, 38),
        (215, 48, 39),
        (244, 109, 67),
        (253, 174, 97),
        (254, 224, 139),
        (255, 255, 191),
        (217, 239, 139),
        (166, 217, 106),
        (102, 189, 99),
        (26, 152, 80),
        (0, 104, 55),
    ),
    "viridis": (
        (68, 1, 84),
        (72, 40, 120),
        (62, 73, 137),
        (49, 104, 142),
        (38, 130, 142),
        (31, 158, 137),
        (53, 183, 121),
        (109, 205, 89),
        (180, 222, 44),
        (253, 231, 37),
    ),
    "plasma": (
        (13, 8, 135),
        (75, 3, 161),
        (125, 3, 168),
        (168, 34, 150),
        (203, 70, 121),
        (229, 107, 93),
        (248, 148, 65),
        (253, 195, 40),
        (240, 249, 33),
    ),
}


def generate_colormap(name: str) -> List[RGB]:
    """Return the RGB triples of palette *name* as a new list.

    Raises:
        UnknownColormapError: if *name* is not a known palette.
    """
    key = name.lower()
    if key not in COLORMAPS:
        raise UnknownColormapError(
            f"Colormap '{name}' not supported. Choose from: {list(COLORMAPS)}"
        )
    return list(COLORMAPS[key])


def to_matplotlib(name: str) -> ListedColormap:
    """Wrap a palette as a matplotlib colormap with transparent NaNs."""
    colors = np.asarray(generate_colormap(name), dtype=np.float64) / 255.0
    cmap = ListedColormap(colors, name=name.lower())
    return cmap.with_extremes(bad=(0.0, 0.0, 0.0, 0.0))


def colorize(values, name: str, vmin: float = -1.0, vmax: float = 1.0) -> np.ndarray:
    """Map *values* to RGBA through the discrete palette *name*.

    Values are normalized to ``[0, 1]`` over ``[vmin, vmax]`` (clipped) and
    each one takes the color of the palette step it falls in. NaN values are
    fully transparent. The result has the input's shape plus a trailing axis
    of 4 ``uint8`` channels.
    """
    if vmax <= vmin:
        raise ValueError(f"vmax ({vmax}) must be greater than vmin ({vmin})")
    palette = np.asarray(generate_colormap(name), dtype=np.uint8)
    steps = len(palette)
    arr = np.asarray(values, dtype=np.float64)
    invalid = np.isnan(arr)

    norm = np.clip((np.where(invalid, vmin, arr) - vmin) / (vmax - vmin), 0.0, 1.0)
    idx = np.minimum(steps - 1, np.floor(norm * steps).astype(np.int64))

    rgba = np.zeros(arr.shape + (4,), dtype=np.uint8)
    rgba[..., :3] = palette[idx]
    rgba[..., 3] = np.where(invalid, 0, 255)
    return rgba


def false_color(
    nir: BandData,
    red: BandData,
    green: BandData,
    vmin: float = 0.0,
    vmax: float = 3000.0,
) -> np.ndarray:
    """Stack NIR, red and green as an RGBA false-color infrared composite.

    Each band is stretched linearly from ``[vmin, vmax]`` (clipped) to
    0..255. Pixels that are nodata or NaN in any band are transparent. The
    default range suits Sentinel-2 L2A digital numbers.

    Raises:
        DimensionMismatchError: if the bands differ in shape.
    """
    if vmax <= vmin:
        raise ValueError(f"vmax ({vmax}) must be greater than vmin ({vmin})")
    check_aligned(nir, red, green)
    bands = (nir, red, green)
    invalid = np.zeros(len(nir), dtype=bool)
    for band in bands:
        invalid |= band.nodata_mask() | np.isnan(band.data)

    rgba = np.zeros((nir.height, nir.width, 4), dtype=np.uint8)
    for channel, band in enumerate(bands):
        values = np.where(invalid, vmin, band.data.astype(np.float64))
        scaled = np.clip((values - vmin) / (vmax - vmin), 0.0, 1.0) * 255.0
        rgba[..., channel] = np.round(scaled).astype(np.uint8).reshape(nir.shape)
    rgba[..., 3] = np.where(invalid, 0, 255).reshape(nir.shape)
    return rgba
