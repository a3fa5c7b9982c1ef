"""
Module `ingestion.sensorspec` defines the SensorSpec class, which holds the
band aliases, native resolution and digital-number scaling of each imagery
collection the dashboard searches.
"""

import json
from pathlib import Path
from typing import Optional

import numpy as np

from .bands import BandData
from .calibration import dn_to_reflectance


class SensorSpec:
    """
    Holds metadata for a collection (band assets, resolution, scaling).
    """

    _registry: Optional[dict] = None

    def __init__(
        self,
        collection_id: str,
        bands: dict,
        native_resolution: float,
        scale: float = 1.0,
        offset: float = 0.0,
        nodata: float | None = None,
    ):
        self.collection_id = collection_id
        self.bands = bands
        self.native_resolution = native_resolution
        self.scale = scale
        self.offset = offset
        self.nodata = nodata

    def asset_for(self, alias: str) -> str:
        """Return the collection's asset name for a band alias like ``nir``."""
        try:
            return self.bands[alias.lower()]
        except KeyError:
            raise ValueError(
                f"Band '{alias}' not available for {self.collection_id}. "
                f"Choose from: {list(self.bands)}"
            ) from None

    def to_reflectance(self, band: BandData) -> BandData:
        """
        Scale a band of digital numbers to reflectance.

        Samples equal to the band's (or this collection's) nodata value are
        carried over as NaN, and the returned band uses NaN as its sentinel.
        """
        nodata = band.nodata if band.nodata is not None else self.nodata
        source = BandData(band.data, band.width, band.height, nodata=nodata)
        values = dn_to_reflectance(source.data, self.scale) + self.offset
        values[source.nodata_mask()] = np.nan
        return BandData(values, band.width, band.height, nodata=float("nan"))

    @classmethod
    def _load_registry(cls) -> dict:
        """Load sensor specs from resources/sensor_specs.json."""
        if cls._registry is None:
            base = Path(__file__).resolve().parent.parent
            spec_file = base / "resources" / "sensor_specs.json"
            with open(spec_file, "r", encoding="utf-8") as f:
                cls._registry = json.load(f)
        return cls._registry

    @classmethod
    def from_collection_id(cls, collection_id: str) -> "SensorSpec":
        """
        Factory method: create a SensorSpec from a collection ID by reading the registry.
        """
        registry = cls._load_registry()
        spec = registry.get(collection_id)
        if spec is None:
            raise ValueError(
                f"Collection ID '{collection_id}' not found in sensor_specs.json"
            )
        return cls(
            collection_id=collection_id,
            bands=spec["bands"],
            native_resolution=spec["native_resolution"],
            scale=spec.get("scale", 1.0),
            offset=spec.get("offset", 0.0),
            nodata=spec.get("nodata"),
        )
