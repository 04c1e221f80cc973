"""Utility modules for irulefmt.

Provides:
- logger: get_logger for logging
"""

from irulefmt.utils.logger import get_logger

__all__ = ["get_logger"]
