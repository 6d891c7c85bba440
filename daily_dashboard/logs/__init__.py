"""Logging utilities for the Daily Dashboard."""

from .setup import LOG_FORMAT, configure_logging

__all__ = ["LOG_FORMAT", "configure_logging"]
