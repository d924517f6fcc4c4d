"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for decoder output.

This module implements:
- BarcodeValidator: GS1 check-digit validation and normalization
- ObservationValidator: Sanity checks on raw decoder observations

Validation Rules for Barcodes:
-----------------------------
- Surrounding whitespace is stripped
- Digits only
- Length must match the symbology
- Last digit must equal the GS1 mod-10 check digit
- For "upc", an EAN-13 with a leading zero is a UPC-A and is reported
  without the zero

==============================================================================
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Dict, Tuple

from scan_aggregator.core import exceptions
from scan_aggregator.schemas import Observation, ValidationResult


class BarcodeValidator:
    """
    Validator for retail barcodes (UPC-A, EAN-13, EAN-8).

    Follows the external validator contract ``validate(code, symbology)``
    so an instance's bound method can be handed to the aggregator.

    Example:
        >>> validator = BarcodeValidator()
        >>> result = validator.validate("0012345678905", "upc")
        >>> result.modified_code, result.valid
        ('012345678905', True)
    """

    # Accepted code lengths per symbology
    LENGTHS: Dict[str, Tuple[int, ...]] = {
        "upc": (12, 13),
        "ean13": (13,),
        "ean8": (8,),
        "ean": (8, 13),
    }

    @staticmethod
    def check_digit(payload: str) -> int:
        """
        Compute the GS1 mod-10 check digit.

        Args:
            payload: Digits without the check digit

        Returns:
            Check digit (0-9)
        """
        total = 0
        for position, digit in enumerate(reversed(payload)):
            weight = 3 if position % 2 == 0 else 1
            total += int(digit) * weight
        return (10 - total % 10) % 10

    def validate(self, code: str, symbology: str = "upc") -> ValidationResult:
        """
        Validate and normalize a decoded barcode.

        Args:
            code: Raw decoded string
            symbology: Expected symbology (upc, ean13, ean8, ean)

        Returns:
            ValidationResult with the normalized code and validity

        Raises:
            AppException: If the symbology is not supported
        """
        lengths = self.LENGTHS.get(symbology.lower())
        if lengths is None:
            raise exceptions.unsupported_symbology(symbology)

        code = code.strip()

        if not code.isdigit() or not code.isascii():
            return ValidationResult(modified_code=code, valid=False)

        if symbology.lower() == "upc" and len(code) == 13:
            # UPC-A read as EAN-13 carries a leading zero
            if not code.startswith("0"):
                return ValidationResult(modified_code=code, valid=False)
            code = code[1:]

        if len(code) not in lengths:
            return ValidationResult(modified_code=code, valid=False)

        valid = self.check_digit(code[:-1]) == int(code[-1])
        return ValidationResult(modified_code=code, valid=valid)

    def is_valid(self, code: str, symbology: str = "upc") -> bool:
        """Quick validation check."""
        return self.validate(code, symbology).valid


class ObservationValidator:
    """
    Sanity checks for raw decoder observations.

    Rejects missing or empty codes and error scores that are not a
    non-negative finite number.
    """

    def check(self, raw_code: Any, error_score: Any) -> Observation:
        """
        Check a raw observation.

        Args:
            raw_code: Decoded string
            error_score: Decoder error score

        Returns:
            The observation as a typed model

        Raises:
            AppException: MALFORMED_OBSERVATION describing the first problem
        """
        if not isinstance(raw_code, str):
            raise exceptions.malformed_observation("code is not a string", raw_code)

        if not raw_code:
            raise exceptions.malformed_observation("code is empty", raw_code)

        if isinstance(error_score, bool) or not isinstance(error_score, numbers.Real):
            raise exceptions.malformed_observation("error score is not a number", raw_code)

        if math.isnan(error_score):
            raise exceptions.malformed_observation("error score is NaN", raw_code)

        if error_score < 0:
            raise exceptions.malformed_observation("error score is negative", raw_code)

        return Observation(raw_code=raw_code, error_score=float(error_score))

    def is_valid(self, raw_code: Any, error_score: Any) -> bool:
        """Quick validation check."""
        try:
            self.check(raw_code, error_score)
        except exceptions.AppException:
            return False
        return True
