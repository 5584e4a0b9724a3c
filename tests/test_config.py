"""Tests for settings and logging setup."""

import logging

import pytest

from web2rag.config import (
    AppConfig,
    FetchConfig,
    get_logger,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    names = ("web2rag", "aiohttp.access")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestSettings:
    """Tests for dataclass defaults."""

    def test_defaults(self):
        """Defaults match the documented limits."""
        config = AppConfig()
        assert config.extraction.min_main_content_chars == 50
        assert config.extraction.min_chunk_length == 20
        assert config.crawl.max_pages == 30
        assert config.export.archive_file_name == "web2rag_export.zip"

    def test_proxies_disabled_by_default(self):
        """Proxy fallback is opt-in."""
        config = FetchConfig()
        assert config.use_proxies is False
        assert all("{url}" in template for template in config.proxy_templates)


class TestLogging:
    """Tests for logging helpers."""

    def test_level_for_verbosity(self):
        assert level_for_verbosity(True) == logging.DEBUG
        assert level_for_verbosity(False) == logging.INFO

    def test_get_logger_namespaces_names(self):
        """Loggers always live under the web2rag namespace."""
        assert get_logger().name == "web2rag"
        assert get_logger("cli").name == "web2rag.cli"
        assert get_logger("web2rag.crawler").name == "web2rag.crawler"

    def test_setup_logging(self, restore_logging):
        """The package logger gets the level; noisy libraries are capped at WARNING."""
        logger = setup_logging(level=logging.DEBUG)
        assert logger.name == "web2rag"
        assert logger.level == logging.DEBUG
        assert logging.getLogger("aiohttp.access").level == logging.WARNING
