"""
flatstore Configuration Module.

Handles store settings (file encoding, JSON layout, write strategy, logging).
Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Settings shared by every TableStore in the process."""

    model_config = SettingsConfigDict(
        env_prefix="FLATSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    encoding: str = Field(default="utf-8", description="Encoding used to read and write the document")
    indent: int | None = Field(
        default=None,
        ge=0,
        description="JSON indent for the persisted document (None writes compact JSON)",
    )
    ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters when writing")
    atomic_write: bool = Field(
        default=True,
        description="Write to a temporary file and rename it over the document",
    )
    log_level: str = Field(default="INFO", description="Level applied by configure_logging()")


@lru_cache
def get_settings() -> StoreSettings:
    """Get cached settings instance."""
    return StoreSettings()
