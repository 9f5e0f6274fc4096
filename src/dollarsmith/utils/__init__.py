"""Utility modules for dollarsmith.

Provides:
- logger: get_logger for logging
"""

from dollarsmith.utils.logger import get_logger

__all__ = [
    "get_logger",
]
