"""Utility modules for glulex.

Provides:
- logger: get_logger for logging
"""

from glulex.utils.logger import get_logger

__all__ = ["get_logger"]
