"""Utility modules for friendgraph."""

from .logging import configure_logging, get_logger, setup_logger

__all__ = ["configure_logging", "get_logger", "setup_logger"]
