"""Shared utilities."""

from gitgallery.utilities.logger import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
