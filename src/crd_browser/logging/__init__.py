"""Logging configuration for crd_browser."""

from crd_browser.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
