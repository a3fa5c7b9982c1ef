import numpy as np
import pytest

from belemsat.ingestion.bands import BandData, DimensionMismatchError

from belemsat.visualization.colormaps import (
    UnknownColormapError,
    colorize,
    false_color,
    generate_colormap,
    to_matplotlib,
)


def test_viridis_palette():
    cmap = generate_colormap("viridis")
    assert len(cmap) == 10
    assert cmap[0] == (68, 1, 84)
    assert cmap[-1] == (253, 231, 37)


@pytest.mark.parametrize(
    "name,length", [("blues", 9), ("rdylgn", 11), ("plasma", 9), ("Viridis", 10)]
)
def test_palette_lengths(name, length):
    cmap = generate_colormap(name)
    assert len(cmap) == length
    assert all(0 <= c <= 255 for rgb in cmap for c in rgb)


def test_unknown_palette_raises():
    with pytest.raises(UnknownColormapError):
        generate_colormap("jet")
    with pytest.raises(ValueError):
        generate_colormap("")


def test_palette_is_a_fresh_copy():
    first = generate_colormap("blues")
    first.clear()
    assert len(generate_colormap("blues")) == 9


def test_colorize_maps_ends_and_nan():
    rgba = colorize(np.array([-1.0, 1.0, np.nan, 5.0]), "viridis")
    assert rgba.shape == (4, 4)
    assert tuple(rgba[0, :3]) == (68, 1, 84)
    assert tuple(rgba[1, :3]) == (253, 231, 37)
    assert rgba[2, 3] == 0
    assert tuple(rgba[3, :3]) == (253, 231, 37)
    assert rgba[0, 3] == 255


def test_colorize_rejects_empty_range():
    with pytest.raises(ValueError):
        colorize(np.zeros(2), "blues", vmin=1.0, vmax=1.0)


def test_to_matplotlib():
    cmap = to_matplotlib("rdylgn")
    assert cmap.N == 11
    assert cmap(np.nan)[3] == 0.0


def test_false_color_stretch_and_nodata():
    nir = BandData.from_array([[0, 1500], [3000, 6000]])
    red = BandData.from_array([[3000, 0], [0, 0]])
    green = BandData.from_array([[0, 0], [1500, -1]], nodata=-1)
    rgba = false_color(nir, red, green)
    assert rgba.shape == (2, 2, 4)
    assert rgba.dtype == np.uint8
    assert tuple(rgba[0, 0]) == (0, 255, 0, 255)
    assert rgba[0, 1, 0] == 128
    assert tuple(rgba[1, 0]) == (255, 0, 128, 255)
    assert rgba[1, 1, 3] == 0


def test_false_color_checks_alignment_and_range():
    a = BandData(np.ones(4), width=2, height=2)
    b = BandData(np.ones(4), width=4, height=1)
    with pytest.raises(DimensionMismatchError):
        false_color(a, a, b)
    with pytest.raises(ValueError):
        false_color(a, a, a, vmin=5, vmax=5)
