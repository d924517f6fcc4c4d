"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from scan_aggregator.config import get_settings, Settings

    settings = get_settings()
    print(settings.error_threshold)

==============================================================================
"""

from .settings import SUPPORTED_SYMBOLOGIES, Settings, get_settings

__all__ = [
    "SUPPORTED_SYMBOLOGIES",
    "Settings",
    "get_settings",
]
