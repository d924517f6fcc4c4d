"""
Aggregator Exception Handling

Single AppException class for all aggregator errors.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Unified exception for all aggregator error scenarios.

    Raised by the collaborators of the aggregator (observation checks and
    the barcode validator) and caught at the aggregator boundary, where the
    offending observation is recorded as rejected.

    Usage:
        raise AppException("Empty barcode", "MALFORMED_OBSERVATION")
        raise AppException("Unknown symbology", "UNSUPPORTED_SYMBOLOGY", {"symbology": "qr"})

    Error Codes:
        Observation:
            - MALFORMED_OBSERVATION
        Validation:
            - UNSUPPORTED_SYMBOLOGY
            - VALIDATOR_FAULT
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize aggregator exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "MALFORMED_OBSERVATION")
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for logging or display."""
        error_dict = {
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def malformed_observation(reason: str, raw_code: Any = None) -> AppException:
    """Create malformed observation exception."""
    return AppException(
        f"Malformed observation: {reason}",
        "MALFORMED_OBSERVATION",
        {"reason": reason, "raw_code": raw_code}
    )


def unsupported_symbology(symbology: str) -> AppException:
    """Create unsupported symbology exception."""
    return AppException(
        f"Unsupported symbology: {symbology}",
        "UNSUPPORTED_SYMBOLOGY",
        {"symbology": symbology}
    )


def validator_fault(raw_code: str, error: Exception) -> AppException:
    """Create validator fault exception wrapping the original error."""
    return AppException(
        f"Validator failed for {raw_code!r}: {error}",
        "VALIDATOR_FAULT",
        {"raw_code": raw_code, "error_type": type(error).__name__}
    )
