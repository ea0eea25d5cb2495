"""Shared utilities (logging)."""

from .logger import MarkupLogger, configure_global_logging, get_logger

__all__ = ["MarkupLogger", "configure_global_logging", "get_logger"]
