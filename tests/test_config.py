"""Test suite for ConfigManager: verifying loading formats, defaults, and merging behavior."""

import json
import pytest

import yaml
import toml

from belemsat.core.config import ConfigManager, ConfigValidationError


def test_defaults():
    """Analysis defaults are available without any file."""
    cfg = ConfigManager()
    assert cfg.get("default_index") == "ndwi"
    assert cfg.get("threshold") == pytest.approx(0.2)
    assert cfg.get("pixel_size") == pytest.approx(10.0)
    assert cfg.get("auto_threshold") is False
    assert cfg.get("collection") is None
    assert cfg.get_colormap("ndvi") == "rdylgn"
    assert cfg.get_colormap() == "blues"


def test_load_json(tmp_path):
    """Ensure JSON files load correctly and default values are returned for missing keys."""
    cfg_file = tmp_path / "cfg.json"
    cfg_file.write_text(json.dumps({"threshold": 0.3, "b": "two"}), encoding="utf-8")

    cfg = ConfigManager(str(cfg_file))

    assert cfg.get("threshold") == pytest.approx(0.3)
    assert cfg.get("b") == "two"
    assert cfg.get("missing", "def") == "def"


def test_load_yaml_colormaps(tmp_path):
    """A colormaps table overrides the palette of individual indices."""
    cfg_file = tmp_path / "cfg.yaml"
    data = {"pixel_size": 30, "colormaps": {"NDMI": "plasma"}}
    cfg_file.write_text(yaml.safe_dump(data), encoding="utf-8")

    cfg = ConfigManager()
    cfg.load(str(cfg_file))

    assert cfg.get("pixel_size") == 30
    assert cfg.get_colormap("ndmi") == "plasma"
    assert cfg.get_colormap("ndwi") == "blues"
    assert "colormaps" not in cfg.config


def test_load_toml(tmp_path):
    """Check TOML file loading and value retrieval functionality."""
    cfg_file = tmp_path / "cfg.toml"
    cfg_file.write_text(toml.dumps({"auto_threshold": True, "num": 42}), encoding="utf-8")

    cfg = ConfigManager()
    cfg.load(str(cfg_file))

    assert cfg.get("auto_threshold") is True
    assert cfg.get("num") == 42


def test_load_unsupported_extension(tmp_path):
    """Confirm that loading unsupported file extensions raises ConfigValidationError."""
    cfg_file = tmp_path / "cfg.txt"
    cfg_file.write_text("whatever", encoding="utf-8")

    with pytest.raises(ConfigValidationError, match="Unsupported"):
        ConfigManager().load(str(cfg_file))


def test_load_invalid_content(tmp_path):
    """Ensure invalid JSON content triggers a ConfigValidationError."""
    cfg_file = tmp_path / "bad.json"
    cfg_file.write_text("not a json!", encoding="utf-8")

    with pytest.raises(ConfigValidationError):
        ConfigManager().load(str(cfg_file))


def test_load_non_mapping(tmp_path):
    """A YAML list is not a valid configuration."""
    cfg_file = tmp_path / "list.yaml"
    cfg_file.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ConfigValidationError):
        ConfigManager().load(str(cfg_file))


def test_get_default_attrs():
    """Validate default attributes are exposed through get()."""
    cfg = ConfigManager()
    assert ".tif" in cfg.get("supported_input_formats")
    assert cfg.get("index_colormaps") == {}


def test_colormap_falls_back_to_index_registry(tmp_path):
    """Palettes come from the index registry unless a file overrides them."""
    from belemsat.ingestion.indices import INDEX_REGISTRY

    cfg = ConfigManager()
    for name, meta in INDEX_REGISTRY.items():
        assert cfg.get_colormap(name) == meta["colormap"]
    assert cfg.get_colormap("unknown") == "viridis"

    cfg_file = tmp_path / "cfg.json"
    cfg_file.write_text(json.dumps({"colormaps": {"ndwi": "plasma"}}), encoding="utf-8")
    cfg.load(str(cfg_file))
    assert cfg.get_colormap("ndwi") == "plasma"
    assert cfg.get_colormap("ndvi") == INDEX_REGISTRY["ndvi"]["colormap"]


def test_check_input_format():
    """Band files must use one of the supported raster extensions."""
    cfg = ConfigManager()
    cfg.check_input_format("scene/B08.TIF")
    cfg.check_input_format("mosaic.vrt")
    with pytest.raises(ConfigValidationError, match="Unsupported band format"):
        cfg.check_input_format("B08.jp2")
