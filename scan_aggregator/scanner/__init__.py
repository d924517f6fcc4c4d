"""
==============================================================================
Scanner Package - Observation Aggregation
==============================================================================

Turns a stream of noisy barcode observations into one decided code.

Classes:
--------
- ScanAggregator: Session-scoped frequency tables and stop decision

Functions:
----------
- classify_codes: Pure classification of an accepted frequency table
- accept_rate / detect_rate / format_rate: Throughput metrics

==============================================================================
"""

from .aggregator import ScanAggregator, monotonic_ms
from .classifier import Classification, classify_codes, rank_entries
from .metrics import accept_rate, detect_rate, format_rate

__all__ = [
    "ScanAggregator",
    "monotonic_ms",
    "Classification",
    "classify_codes",
    "rank_entries",
    "accept_rate",
    "detect_rate",
    "format_rate",
]
