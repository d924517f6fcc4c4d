"""
==============================================================================
Scan Aggregator
==============================================================================

Statistical consensus over noisy barcode scans.

Usage:
------
    from scan_aggregator import ScanAggregator

    aggregator = ScanAggregator(sink=render)
    decoder.on_detected(aggregator.record_observation)

==============================================================================
"""

from .scanner import ScanAggregator, accept_rate, detect_rate, format_rate
from .schemas import ClassifiedEntry, EntryStatus, ScanSnapshot, SessionTiming

__all__ = [
    "ScanAggregator",
    "accept_rate",
    "detect_rate",
    "format_rate",
    "ClassifiedEntry",
    "EntryStatus",
    "ScanSnapshot",
    "SessionTiming",
]
