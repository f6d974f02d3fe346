"""
Brand Brief Logging Configuration

Logging setup with a debug switch and secret masking for OAuth material.
"""

import os
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from brand_brief.wizard.ui import mask_secrets


ROOT_LOGGER = "brand_brief"


def debug_enabled() -> bool:
    """Return True when BRAND_BRIEF_DEBUG asks for verbose output."""
    return os.environ.get("BRAND_BRIEF_DEBUG", "").lower() in ("1", "true", "yes")


def _level_from_env() -> Optional[int]:
    name = os.environ.get("BRAND_BRIEF_LOG_LEVEL", "").upper()
    if name in ("DEBUG", "INFO", "WARNING", "ERROR"):
        return getattr(logging, name)
    return None


class SecretMaskingFormatter(logging.Formatter):
    """Formatter that masks tokens and client secrets in log records."""

    def format(self, record: logging.LogRecord) -> str:
        return mask_secrets(super().format(record))


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (default: DEBUG if BRAND_BRIEF_DEBUG, else
            BRAND_BRIEF_LOG_LEVEL, else WARNING)
        log_file: Optional path to log file
        quiet: If True, suppress console output

    Returns:
        Configured logger
    """
    debug = debug_enabled()
    if level is None:
        if debug:
            level = logging.DEBUG
        else:
            level = _level_from_env() or logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if debug:
            console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            console_format = "%(levelname)s: %(message)s"

        console_handler.setFormatter(SecretMaskingFormatter(console_format))
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
        file_handler.setFormatter(SecretMaskingFormatter(file_format))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the brand_brief hierarchy.

    Args:
        name: Logger name (will be prefixed with 'brand_brief.')

    Returns:
        Configured logger
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    parent = logging.getLogger(ROOT_LOGGER)
    if not parent.handlers:
        setup_logging()

    return logging.getLogger(name)


def get_log_path(base_dir: Path) -> Path:
    """Get the default log file path for a day's session."""
    return base_dir / "logs" / f"brand-brief-{datetime.now().strftime('%Y-%m-%d')}.log"

