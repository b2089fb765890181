"""Low-level shared utilities for sanitize-fs."""

from .logging import get_logger, setup_logging, SanitizeLogger

__all__ = [
    "get_logger",
    "setup_logging",
    "SanitizeLogger",
]
