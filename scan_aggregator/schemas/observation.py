"""
==============================================================================
Observation Schemas Module
==============================================================================

Pydantic models for decoder observations and validator results.

==============================================================================
"""

from pydantic import BaseModel, ConfigDict, Field


class Observation(BaseModel):
    """
    One decoder-reported detection.

    Attributes:
        raw_code: Decoded barcode string as reported by the decoder
        error_score: Decoder error score (lower is better, unbounded above)
    """

    model_config = ConfigDict(frozen=True)

    raw_code: str = Field(..., description="Decoded barcode string")
    error_score: float = Field(..., description="Decoder error score")


class ValidationResult(BaseModel):
    """
    Outcome of validating a raw code against a symbology.

    Accepts both the snake_case field names and the ``modifiedCode`` wire
    name used by external validators.

    Attributes:
        modified_code: Normalized code to aggregate under
        valid: Whether the code passed the format/checksum check
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    modified_code: str = Field(..., alias="modifiedCode", description="Normalized code")
    valid: bool = Field(..., description="Checksum/format validity")
