"""
==============================================================================
Aggregator Settings Module
==============================================================================

Configuration management for the scan aggregator using Pydantic Settings.

A single global configuration instance is shared through ``get_settings()``.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Tunable classification thresholds

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


# Symbologies understood by the bundled barcode validator
SUPPORTED_SYMBOLOGIES = ("upc", "ean13", "ean8", "ean")


class Settings(BaseSettings):
    """
    Aggregator settings loaded from environment variables.

    Attributes:
        app_name: Display name used in log messages
        debug: Enable debug mode for verbose logging
        error_threshold: Decoder error score above which an observation is
            rejected without consulting the validator
        symbology: Expected barcode symbology passed to the validator
        perfect_min_count: Count a lone code needs to be accepted outright,
            and the leading count required before clustering is attempted
        min_spread: Standard deviation the counts must exceed before
            clustering is attempted
        cluster_width: Width of the cluster below the leading count, in
            standard deviations
        malformed_marker: Code recorded for observations with no usable code

    Example:
        >>> settings = Settings()
        >>> settings.error_threshold
        0.25
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        # Environment variables are case-insensitive
        case_sensitive=False,
        # Ignore extra environment variables
        extra="ignore",
        # Validate default values
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Scan Aggregator",
        description="Display name used in log messages"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # OBSERVATION GATING
    # =========================================================================
    error_threshold: float = Field(
        default=0.25,
        ge=0.0,
        description="Decoder error score above which observations are rejected"
    )

    symbology: str = Field(
        default="upc",
        description="Expected barcode symbology"
    )

    malformed_marker: str = Field(
        default="<malformed>",
        min_length=1,
        description="Code recorded for observations without a usable code"
    )

    # =========================================================================
    # CLASSIFICATION THRESHOLDS
    # =========================================================================
    perfect_min_count: int = Field(
        default=6,
        ge=1,
        description="Minimum count before a scan can converge"
    )

    min_spread: float = Field(
        default=1.0,
        ge=0.0,
        description="Standard deviation the counts must exceed to cluster"
    )

    cluster_width: float = Field(
        default=1.5,
        gt=0.0,
        description="Cluster width below the leading count, in stddev units"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("symbology")
    @classmethod
    def validate_symbology(cls, value: str) -> str:
        """
        Validate and normalize the expected symbology.

        Names outside SUPPORTED_SYMBOLOGIES are allowed for plugged-in
        validators; the bundled BarcodeValidator rejects them at scan time.

        Args:
            value: Raw symbology name

        Returns:
            Lowercase symbology name

        Raises:
            ValueError: If the symbology is blank
        """
        normalized = value.lower().strip()

        if not normalized:
            raise ValueError("Symbology must not be blank")

        if normalized not in SUPPORTED_SYMBOLOGIES:
            logger.warning(
                f"Symbology '{normalized}' is not known to the bundled validator"
            )

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def log_level(self) -> int:
        """Logging level implied by the debug flag."""
        return logging.DEBUG if self.debug else logging.INFO

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"symbology={self.symbology!r}, "
            f"error_threshold={self.error_threshold}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Uses lru_cache to ensure only one Settings instance is created.
    Call ``get_settings.cache_clear()`` to reload from the environment.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
