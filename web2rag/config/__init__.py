# Configuration Module
"""Configuration settings for web2rag."""

from .settings import (
    AppConfig,
    CrawlConfig,
    ExportConfig,
    ExtractionConfig,
    FetchConfig,
)
from .logging_config import setup_logging, get_logger, level_for_verbosity

__all__ = [
    "AppConfig",
    "CrawlConfig",
    "ExportConfig",
    "ExtractionConfig",
    "FetchConfig",
    "setup_logging",
    "get_logger",
    "level_for_verbosity",
]
