import json

import rasterio
import yaml
from click.testing import CliRunner

from belemsat.core.cli import cli


def _band_args(band_files):
    return ["-b", f"green={band_files['green']}", "-b", f"nir={band_files['nir']}"]


def test_colormap_command():
    result = CliRunner().invoke(cli, ["colormap", "viridis"])
    assert result.exit_code == 0
    steps = json.loads(result.stdout)
    assert steps[0] == [68, 1, 84]
    assert len(steps) == 10


def test_colormap_unknown_name():
    result = CliRunner().invoke(cli, ["colormap", "jet"])
    assert result.exit_code != 0


def test_index_command_writes_raster(tmp_path, band_files):
    out = tmp_path / "ndwi.tif"
    png = tmp_path / "ndwi.png"
    result = CliRunner().invoke(
        cli,
        ["index", "ndwi", *_band_args(band_files), "-o", str(out), "--quicklook", str(png)],
    )
    assert result.exit_code == 0, result.output
    stats = json.loads(result.stdout)
    assert stats["valid_count"] == 5
    assert stats["min"] <= stats["mean"] <= stats["max"]
    with rasterio.open(out) as src:
        assert src.shape == (2, 3)
    assert png.exists()


def test_analyze_command(tmp_path, band_files):
    mask_path = tmp_path / "mask.tif"
    csv_path = tmp_path / "summary.csv"
    result = CliRunner().invoke(
        cli,
        [
            "analyze",
            "ndwi",
            *_band_args(band_files),
            "--collection",
            "sentinel-2-l2a",
            "--threshold",
            "0.2",
            "--mask-out",
            str(mask_path),
            "--summary-csv",
            str(csv_path),
        ],
    )
    assert result.exit_code == 0, result.output
    row = json.loads(result.stdout)
    assert row["mask_pixel_count"] == 2
    assert row["mask_area"] == 200.0
    assert mask_path.exists()
    assert csv_path.exists()


def test_analyze_uses_config_threshold(tmp_path, band_files):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(yaml.safe_dump({"threshold": 0.72}), encoding="utf-8")
    result = CliRunner().invoke(
        cli, ["--config", str(cfg), "analyze", "ndwi", *_band_args(band_files)]
    )
    assert result.exit_code == 0, result.output
    row = json.loads(result.stdout)
    assert row["threshold"] == 0.72
    assert row["mask_pixel_count"] == 1


def test_analyze_bad_threshold(band_files):
    result = CliRunner().invoke(
        cli, ["analyze", "ndwi", *_band_args(band_files), "-t", "lots"]
    )
    assert result.exit_code == 2


def test_analyze_missing_band_fails(band_files):
    result = CliRunner().invoke(
        cli, ["analyze", "ndvi", "-b", f"nir={band_files['nir']}"]
    )
    assert result.exit_code == 1
    assert "❌" in result.output


def test_band_option_format(band_files):
    result = CliRunner().invoke(cli, ["index", "ndwi", "-b", band_files["green"]])
    assert result.exit_code == 2


def test_threshold_command_otsu(tmp_path, make_raster):
    index_tif = make_raster(
        tmp_path / "ndwi.tif",
        [[0.8, 0.7, -0.5], [-0.6, -0.4, float("nan")]],
        nodata=float("nan"),
    )
    result = CliRunner().invoke(
        cli, ["threshold", index_tif, "--pixel-size", "10"]
    )
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["auto_threshold"] is True
    assert -0.4 < out["threshold"] < 0.7
    assert out["pixel_count"] == 2
    assert out["area"] == 200.0


def test_config_collection_matches_flag(tmp_path, band_files):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(yaml.safe_dump({"collection": "landsat-c2-l2"}), encoding="utf-8")
    runner = CliRunner()
    from_config = runner.invoke(
        cli, ["--config", str(cfg), "index", "ndwi", *_band_args(band_files)]
    )
    from_flag = runner.invoke(
        cli, ["index", "ndwi", *_band_args(band_files), "-c", "landsat-c2-l2"]
    )
    assert from_config.exit_code == 0, from_config.output
    assert from_flag.exit_code == 0, from_flag.output
    assert json.loads(from_config.stdout) == json.loads(from_flag.stdout)


def test_unsupported_band_extension(tmp_path):
    jp2 = tmp_path / "B03.jp2"
    jp2.write_bytes(b"")
    result = CliRunner().invoke(cli, ["index", "ndwi", "-b", f"green={jp2}"])
    assert result.exit_code == 2
    assert "Unsupported band format" in result.output


def test_composite_command(tmp_path, make_raster):
    paths = {
        role: make_raster(tmp_path / f"{role}.tif", [[0, 1500], [3000, 6000]])
        for role in ("nir", "red", "green")
    }
    out = tmp_path / "false_color.png"
    args = ["composite", "-o", str(out)]
    for role, path in paths.items():
        args += ["-b", f"{role}={path}"]
    result = CliRunner().invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_composite_missing_band(band_files):
    result = CliRunner().invoke(
        cli, ["composite", "-o", "x.png", "-b", f"nir={band_files['nir']}"]
    )
    assert result.exit_code == 1
    assert "❌" in result.output
