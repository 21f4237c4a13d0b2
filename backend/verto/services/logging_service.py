"""Logging setup for the Verto service.

Modules log through `logging.getLogger(__name__)`; this module only wires
the root logger from the `logging` section of the configuration.
"""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Base logs directory
LOGS_BASE_DIR = Path(__file__).parent.parent.parent / "logs"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: str = "INFO",
    fmt: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Log record format; defaults to DEFAULT_FORMAT
        log_file: Optional file name, written under LOGS_BASE_DIR
    """
    formatter = logging.Formatter(fmt or DEFAULT_FORMAT)
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Replace handlers from a previous call instead of stacking them
    for handler in list(root.handlers):
        if getattr(handler, "_verto_handler", False):
            root.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler._verto_handler = True
    root.addHandler(stream_handler)

    if log_file:
        try:
            LOGS_BASE_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(LOGS_BASE_DIR / log_file, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to open log file {log_file}: {e}")
        else:
            file_handler.setFormatter(formatter)
            file_handler._verto_handler = True
            root.addHandler(file_handler)

    logger.debug(f"Logging configured at level {level.upper()}")


def setup_logging_from_config(config) -> None:
    """Configure logging from a loaded ConfigService."""
    setup_logging(
        level=config.get("logging.level", "INFO"),
        fmt=config.get("logging.format"),
        log_file=config.get("logging.file"),
    )
