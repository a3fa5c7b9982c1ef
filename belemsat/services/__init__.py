"""Service-layer helpers used by the CLI and tests."""

from .water_analysis import AnalysisResult, WaterAnalysisService

__all__ = ["AnalysisResult", "WaterAnalysisService"]
