"""Colormaps and quicklook rendering for index rasters."""

from .colormaps import (
    COLORMAPS,
    UnknownColormapError,
    colorize,
    false_color,
    generate_colormap,
    to_matplotlib,
)

__all__ = [
    "COLORMAPS",
    "UnknownColormapError",
    "colorize",
    "false_color",
    "generate_colormap",
    "to_matplotlib",
]
