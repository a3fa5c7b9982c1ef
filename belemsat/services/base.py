from __future__ import annotations

"""Service base class carrying the logger and analysis settings."""

import logging
from belemsat.core.config import ConfigManager
from belemsat.core.logger import Logger


class BaseService:
    """Base class for service helpers."""

    def __init__(
        self,
        config: ConfigManager | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or ConfigManager()
        self.logger = logger or Logger.get_logger(__name__)

    def setting(self, key: str, default=None):
        """Shortcut for ``self.config.get``."""
        return self.config.get(key, default)
