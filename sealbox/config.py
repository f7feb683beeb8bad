"""
Configuration Management

Centralized configuration using Pydantic Settings with environment variables.
All settings are read with the SEALBOX_ prefix, e.g. SEALBOX_ENCRYPTION_KEY.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sealbox.core.primitives import PRIMITIVES


class Settings(BaseSettings):
    """
    Sealbox settings loaded from environment variables.

    The encryption key has no default: when it is unset the service has
    no default key and every call must pass its own key.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEALBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===================================
    # Encryption
    # ===================================
    ENCRYPTION_KEY: Optional[SecretStr] = Field(default=None, description="Default encryption key")
    PRIMITIVE: str = Field(default="secretbox", description="AEAD primitive: secretbox or chacha20poly1305")

    # ===================================
    # Logging Configuration
    # ===================================
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log format: json or text")
    LOG_FILE: Optional[str] = Field(default=None, description="Log file path")

    # ===================================
    # Monitoring
    # ===================================
    ENABLE_METRICS: bool = Field(default=True, description="Record Prometheus metrics")

    # ===================================
    # Validators
    # ===================================

    @field_validator("PRIMITIVE")
    @classmethod
    def validate_primitive(cls, v):
        """Validate primitive name."""
        v = v.lower()
        if v not in PRIMITIVES:
            raise ValueError(f"Primitive must be one of: {sorted(PRIMITIVES)}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("Log format must be one of: ['json', 'text']")
        return v

    # ===================================
    # Computed Properties
    # ===================================

    @property
    def default_key(self) -> Optional[bytes]:
        """Default key as bytes, or None when not configured."""
        if self.ENCRYPTION_KEY is None:
            return None
        return self.ENCRYPTION_KEY.get_secret_value().encode("utf-8")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.

    Returns:
        Settings: Sealbox settings
    """
    return Settings()
