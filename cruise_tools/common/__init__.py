"""
Shared logging setup for the cruise test tools.

Usage:
    from cruise_tools.common import init_logger

    init_logger(level="DEBUG")
"""

from .global_config import init_logger

__all__ = [
    "init_logger",
]
