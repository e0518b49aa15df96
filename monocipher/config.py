from pathlib import Path
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

from monocipher.core.crypto.monoalphabetic_cipher import (
    ALPHANUMERIC,
    ALPHANUMERIC_WITH_SLASH,
)


DEFAULT_SECRET_KEY = "MONO_CIPHER_KEY"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    app_name: str = "Monoalphabetic Cipher API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Cipher Settings
    mono_cipher_key: str = DEFAULT_SECRET_KEY
    include_slash: bool = False               # 63-char alphabet with "/"

    # SKU Settings
    sku_prefix: str = "si"
    sku_separator: str = "@"
    site_map_path: Optional[Path] = None      # None -> packaged data/site_map.json

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("sku_separator")
    @classmethod
    def _single_character_separator(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("SKU separator must be a single character")
        return value

    @property
    def alphabet(self) -> str:
        """Alphabet selected by include_slash."""
        return ALPHANUMERIC_WITH_SLASH if self.include_slash else ALPHANUMERIC


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
