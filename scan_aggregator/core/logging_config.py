"""
Logging setup for hosts embedding the aggregator.
"""

from __future__ import annotations

import logging
from typing import Optional

from scan_aggregator.config import Settings, get_settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure root logging for the aggregator.

    Args:
        settings: Settings to read the debug flag from (global if None)
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger("scan_aggregator").setLevel(settings.log_level)
