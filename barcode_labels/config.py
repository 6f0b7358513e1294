"""
Configuration management for the Barcode Label Service.
Loads environment variables with validation.
"""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # =============================================================================
    # Code Generation
    # =============================================================================
    preview_limit: int = 10
    max_codes_per_request: int = 10000  # Guards range fields like 1-999999999
    max_padding: int = 64  # Longest zero-padded number part
    barcode_symbology: Literal["Code128"] = "Code128"

    # =============================================================================
    # Standard PDF Layout (duplicate pairs)
    # =============================================================================
    standard_codes_per_page: int = 3
    standard_text_allowance: float = 15.0  # Points reserved above the top barcode
    standard_text_offset: float = 10.0  # Baseline distance above each barcode
    standard_font_size: int = 9

    # =============================================================================
    # Manual PDF Layout (dense grid on A4)
    # =============================================================================
    manual_margin: float = 72.0
    manual_columns: int = 4
    manual_rows: int = 5

    # =============================================================================
    # Deployment Configuration
    # =============================================================================
    service_url: Optional[str] = None
    port: int = 8001
    log_level: Literal["debug", "info", "warning", "error"] = "info"
    environment: Literal["development", "staging", "production"] = "development"

    # =============================================================================
    # Computed Properties
    # =============================================================================
    @property
    def manual_codes_per_page(self) -> int:
        """Number of grid slots on one manual PDF page."""
        return self.manual_columns * self.manual_rows

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


# Global settings instance
settings = Settings()
