"""core.config
---------------

Configuration loader/manager for belemsat. Provides a central API for
loading analysis settings from YAML/TOML/JSON and retrieving them via
:py:meth:`ConfigManager.get`.
"""

import os
import json
import yaml
import toml

from belemsat.ingestion.indices import INDEX_REGISTRY


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""


class ConfigManager:
    """
    Loads and manages analysis configuration from file or defaults.
    """

    # Band raster formats accepted by the CLI
    SUPPORTED_INPUT_FORMATS: tuple[str, ...] = (".tif", ".tiff", ".vrt")

    DEFAULT_INDEX: str = "ndwi"
    DEFAULT_THRESHOLD: float = 0.2
    DEFAULT_PIXEL_SIZE: float = 10.0
    DEFAULT_MODE: str = "above"

    def __init__(self, config_path=None):
        self.config = {
            "default_index": self.DEFAULT_INDEX,
            "collection": None,
            "threshold": self.DEFAULT_THRESHOLD,
            "pixel_size": self.DEFAULT_PIXEL_SIZE,
            "auto_threshold": False,
        }
        self.supported_input_formats = list(self.SUPPORTED_INPUT_FORMATS)
        # Per-index palette overrides; the index registry holds the defaults
        self.index_colormaps: dict[str, str] = {}
        if config_path:
            self.load(config_path)

    def load(self, path: str) -> None:
        """
        Load configuration from a file (YAML, TOML, or JSON).
        Overwrites existing keys in self.config. A ``colormaps`` table
        updates the per-index palettes instead.
        """
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path, "r", encoding="utf-8") as f:
                if ext in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                elif ext == ".toml":
                    data = toml.load(f)
                elif ext == ".json":
                    data = json.load(f)
                else:
                    raise ConfigValidationError(f"Unsupported config format: {ext}")
        except ConfigValidationError:
            raise
        except Exception as e:
            raise ConfigValidationError(
                f"Failed to load config from {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {path} did not produce a dict")
        colormaps = data.pop("colormaps", None)
        if colormaps is not None:
            if not isinstance(colormaps, dict):
                raise ConfigValidationError("'colormaps' must be a mapping")
            self.index_colormaps.update({k.lower(): v for k, v in colormaps.items()})
        self.config.update(data)

    def get(self, key, default=None):
        """
        Retrieve a configuration value by key, or return `default` if not present.
        Also resolves default attributes like `supported_input_formats` and
        `index_colormaps`. The `collection` key is None unless a file sets it,
        in which case band files are scaled with that collection's factors.
        """
        if key in self.config:
            return self.config.get(key, default)
        elif hasattr(self, key):
            return getattr(self, key)
        else:
            return default

    def get_colormap(self, index: str | None = None) -> str:
        """Return the palette name used to display *index*."""
        idx = (index or self.get("default_index", self.DEFAULT_INDEX)).lower()
        if idx in self.index_colormaps:
            return self.index_colormaps[idx]
        return INDEX_REGISTRY.get(idx, {}).get("colormap", "viridis")

    def check_input_format(self, path: str) -> None:
        """Raise :class:`ConfigValidationError` unless *path* is a supported raster."""
        ext = os.path.splitext(path)[1].lower()
        if ext not in self.supported_input_formats:
            raise ConfigValidationError(
                f"Unsupported band format '{ext}' for {path}. "
                f"Choose from: {self.supported_input_formats}"
            )
