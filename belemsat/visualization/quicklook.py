import os

import matplotlib.pyplot as plt
import numpy as np

from belemsat.analytics.results import IndexResult
from belemsat.ingestion.bands import BandData
from .colormaps import colorize, false_color


def save_quicklook(
    result: IndexResult,
    output_path: str,
    colormap: str,
    rescale: tuple[float, float] = (-1.0, 1.0),
) -> None:
    """
    Render an index raster through a discrete palette and save it as PNG.

    Args:
        result: index with raster dimensions
        output_path: file path for the output PNG
        colormap: palette name, see ``COLORMAPS``
        rescale: value range mapped onto the palette
    """
    rgba = colorize(result.as_2d(), colormap, vmin=rescale[0], vmax=rescale[1])
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    plt.imsave(output_path, rgba)


def plot_histogram(
    result: IndexResult,
    output_path: str,
    threshold: float | None = None,
    bins: int = 64,
) -> None:
    """
    Save a histogram of the valid index values, with the threshold marked.

    Args:
        result: index to plot
        output_path: file path for the output PNG
        threshold: optional value drawn as a vertical line
        bins: number of histogram bins
    """
    values = result.data[~np.isnan(result.data)]
    label = (result.name or "index").upper()

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.hist(values, bins=bins, color="steelblue")
    if threshold is not None:
        ax.axvline(threshold, color="crimson", linestyle="--", label=f"t = {threshold:.3f}")
        ax.legend()
    ax.set_xlabel(label)
    ax.set_ylabel("Pixels")
    ax.set_title(f"{label} distribution ({values.size} valid pixels)")
    ax.grid(True)

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)


def save_false_color(
    nir: BandData,
    red: BandData,
    green: BandData,
    output_path: str,
    rescale: tuple[float, float] = (0.0, 3000.0),
) -> None:
    """
    Save a NIR/red/green false-color composite as PNG.

    Args:
        nir, red, green: aligned bands
        output_path: file path for the output PNG
        rescale: band value range stretched onto 0..255
    """
    rgba = false_color(nir, red, green, vmin=rescale[0], vmax=rescale[1])
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    plt.imsave(output_path, rgba)
