"""Utility modules for the application."""

from character_api.utils.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
