"""
Logging Setup
=============

Stderr logging for the extract/crawl commands. Stdout is reserved for
extracted Markdown and chunk text, so nothing here ever writes to it.
"""

import logging
import sys
from typing import Iterable, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that are chatty at INFO/DEBUG during a crawl
NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "asyncio", "chardet", "charset_normalizer")


def level_for_verbosity(verbose: bool) -> int:
    """Map the CLI's -v flag to a logging level."""
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(
    level: int = logging.INFO,
    log_format: Optional[str] = None,
    logger_name: str = "web2rag",
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configure stderr logging for web2rag.

    Calling it again replaces the previous handler, so the level of a later
    CLI invocation in the same process takes effect.

    Args:
        level: Level for web2rag loggers (default: INFO)
        log_format: Custom format string (optional)
        logger_name: Package logger to set the level on
        quiet_loggers: Third-party loggers capped at WARNING

    Returns:
        The package logger
    """
    logging.basicConfig(
        level=level,
        format=log_format or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger


def get_logger(name: str = "web2rag") -> logging.Logger:
    """Logger under the web2rag namespace ("web2rag" itself by default)."""
    if name != "web2rag" and not name.startswith("web2rag."):
        name = f"web2rag.{name}"
    return logging.getLogger(name)
