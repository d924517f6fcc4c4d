"""
==============================================================================
Utilities Package
==============================================================================

Utility classes for the aggregator.

Modules:
--------
- validators: Barcode check-digit validation and observation sanity checks

==============================================================================
"""

from .validators import BarcodeValidator, ObservationValidator

__all__ = [
    "BarcodeValidator",
    "ObservationValidator",
]
