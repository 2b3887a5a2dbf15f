"""
Logging setup - Rich console handler for scripts and the API.
"""
import logging
from typing import Optional

from rich.logging import RichHandler

from .settings import get_settings


def setup_logger(name: str = "cost_pricing", level: Optional[str] = None) -> logging.Logger:
    """Attach a Rich handler to the package logger (idempotent)."""
    logger = logging.getLogger(name)
    logger.setLevel(level or get_settings().log_level)

    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
