"""Utility functions and constants."""

from .constants import *
from .markup import ansi_to_html

__all__ = ["APP_NAME", "APP_VERSION", "DEFAULT_LOG_LINES", "DEFAULT_QUERY_TIMEOUT", "ansi_to_html"]
