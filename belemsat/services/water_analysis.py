from __future__ import annotations

"""Service turning a scene's bands into an index, a mask and its statistics."""

from dataclasses import dataclass
from typing import Mapping, Union

import numpy as np

from belemsat.analytics.results import IndexResult, MaskStatistics
from belemsat.analytics.stats import calculate_mask_statistics, summarize_index
from belemsat.analytics.threshold import apply_threshold, calculate_otsu_threshold
from belemsat.core.config import ConfigManager
from belemsat.ingestion.bands import BandData
from belemsat.ingestion.indices import INDEX_REGISTRY, compute_index
from belemsat.ingestion.raster_io import read_band
from belemsat.ingestion.sensorspec import SensorSpec
from .base import BaseService

ThresholdArg = Union[float, str, None]


@dataclass(eq=False)
class AnalysisResult:
    """Everything one index analysis produces for display and reporting."""

    index: str
    result: IndexResult
    threshold: float
    mode: str
    auto_threshold: bool
    mask: np.ndarray
    mask_stats: MaskStatistics
    colormap: str
    rescale: tuple[float, float]

    def to_dict(self) -> dict:
        """Return a flat summary row (no pixel arrays)."""
        return summarize_index(
            self.result,
            self.mask_stats,
            threshold=self.threshold,
            mode=self.mode,
            auto_threshold=self.auto_threshold,
            colormap=self.colormap,
        )


class WaterAnalysisService(BaseService):
    """Compute an index, threshold it and measure the resulting mask."""

    def _resolve_threshold(
        self, key: str, result: IndexResult, threshold: ThresholdArg
    ) -> tuple[float, bool]:
        if isinstance(threshold, str):
            if threshold.lower() != "otsu":
                raise ValueError(
                    f"Threshold must be a number or 'otsu', got '{threshold}'"
                )
            return calculate_otsu_threshold(result), True
        if threshold is not None:
            return float(threshold), False
        if self.setting("auto_threshold", False):
            return calculate_otsu_threshold(result), True
        default = INDEX_REGISTRY[key].get("threshold")
        if default is None:
            default = self.setting("threshold", ConfigManager.DEFAULT_THRESHOLD)
        return float(default), False

    def analyze(
        self,
        index: str,
        bands: Mapping[str, BandData],
        *,
        threshold: ThresholdArg = None,
        mode: str | None = None,
        pixel_size: float | None = None,
    ) -> AnalysisResult:
        """
        Run index -> threshold -> mask statistics for one scene.

        Args:
            index: registry key such as ``"ndwi"``.
            bands: band role to band, e.g. ``{"green": ..., "nir": ...}``.
            threshold: a number, ``"otsu"``, or None for the configured default.
            mode: ``"above"`` or ``"below"``; defaults to the index's mode.
            pixel_size: ground size of one pixel, for the mask area.
        """
        key = index.lower()
        result = compute_index(key, bands)
        meta = INDEX_REGISTRY[key]

        value, auto = self._resolve_threshold(key, result, threshold)
        mode = mode or meta.get("mode", ConfigManager.DEFAULT_MODE)
        mask = apply_threshold(result, value, mode)

        if pixel_size is None:
            pixel_size = float(
                self.setting("pixel_size", ConfigManager.DEFAULT_PIXEL_SIZE)
            )
        mask_stats = calculate_mask_statistics(mask, pixel_size)

        self.logger.info(
            "%s: threshold %.4f (%s, %s) -> %d px, %.2f%%",
            key.upper(),
            value,
            "otsu" if auto else "fixed",
            mode,
            mask_stats.pixel_count,
            mask_stats.percentage,
            extra={
                "index": key,
                "threshold": value,
                "pixel_count": mask_stats.pixel_count,
            },
        )
        lo, hi = meta.get("rescale", (-1.0, 1.0))
        return AnalysisResult(
            index=key,
            result=result,
            threshold=value,
            mode=mode,
            auto_threshold=auto,
            mask=mask,
            mask_stats=mask_stats,
            colormap=self.config.get_colormap(key),
            rescale=(float(lo), float(hi)),
        )

    def analyze_files(
        self,
        index: str,
        paths: Mapping[str, str],
        *,
        collection: str | None = None,
        threshold: ThresholdArg = None,
        mode: str | None = None,
        pixel_size: float | None = None,
    ) -> AnalysisResult:
        """
        Like :meth:`analyze`, reading each band role from a GeoTIFF path.

        *collection* defaults to the configured ``collection``. When one is
        set, bands are scaled to reflectance with the collection's factors
        and its native resolution becomes the default pixel size.
        """
        collection = collection or self.setting("collection")
        spec = SensorSpec.from_collection_id(collection) if collection else None
        bands = {}
        for role, path in paths.items():
            self.logger.info("Reading %s band from %s", role, path)
            band = read_band(path)
            if spec is not None:
                band = spec.to_reflectance(band)
            bands[role] = band
        if pixel_size is None and spec is not None:
            pixel_size = float(spec.native_resolution)
        return self.analyze(
            index, bands, threshold=threshold, mode=mode, pixel_size=pixel_size
        )
