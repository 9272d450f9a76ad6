"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
import codecs
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError, field_validator

from core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Dashboard settings loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Display
    display_currency: str = Field(default="CAD", alias="DISPLAY_CURRENCY")

    # Parsing
    csv_encoding: str = Field(default="utf-8-sig", alias="CSV_ENCODING")
    max_concurrent_parses: int = Field(default=4, alias="MAX_CONCURRENT_PARSES")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("display_currency")
    @classmethod
    def validate_display_currency(cls, v):
        """Validate currency is a three-letter code."""
        v_upper = v.strip().upper()
        if len(v_upper) != 3 or not v_upper.isalpha():
            raise ValueError("Display currency must be a three-letter code, e.g. CAD")
        return v_upper

    @field_validator("csv_encoding")
    @classmethod
    def validate_encoding(cls, v):
        """Validate the codec is known to Python."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown CSV encoding: {v}")
        return v

    @field_validator("max_concurrent_parses")
    @classmethod
    def validate_concurrency(cls, v):
        """Validate concurrency setting."""
        if v < 1:
            raise ValueError("Max concurrent parses must be at least 1")
        if v > 32:
            raise ValueError("Max concurrent parses should not exceed 32")
        return v

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get dashboard settings singleton.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If an environment value fails validation
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            invalid = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(invalid)}",
                details={"invalid_fields": invalid, "error": str(e)}
            )
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
