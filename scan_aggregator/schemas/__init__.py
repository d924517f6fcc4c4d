"""
==============================================================================
Schemas Package
==============================================================================

Pydantic models exchanged with the decoder, validator and display layers.

==============================================================================
"""

from .observation import Observation, ValidationResult
from .snapshot import (
    ClassifiedEntry,
    EntryStatus,
    ScanSnapshot,
    SessionTiming,
    rank_key,
)

__all__ = [
    "Observation",
    "ValidationResult",
    "ClassifiedEntry",
    "EntryStatus",
    "ScanSnapshot",
    "SessionTiming",
    "rank_key",
]
