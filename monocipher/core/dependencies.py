from typing import Optional

from fastapi import Query

from monocipher.config import get_settings
from monocipher.core.crypto.monoalphabetic_cipher import MonoalphabeticCipher
from monocipher.services.sku_service import get_cipher


def get_cipher_dependency(
    secret_key: Optional[str] = Query(None, description="Secret key (defaults to configured key)")
) -> MonoalphabeticCipher:
    """Dependency to get the cipher for the given (or configured) key."""
    return get_cipher(secret_key)


def get_app_settings():
    """Dependency to get application settings."""
    return get_settings()
