"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the aggregator.

Modules:
--------
- exceptions: AppException class and error factory functions
- logging_config: Root logging setup

Usage:
------
    from scan_aggregator.core import AppException, setup_logging

    # Or use exception factory functions via module
    from scan_aggregator.core import exceptions
    raise exceptions.unsupported_symbology("qr")

==============================================================================
"""

from .exceptions import AppException
from .logging_config import setup_logging

__all__ = [
    "AppException",
    "setup_logging",
]
