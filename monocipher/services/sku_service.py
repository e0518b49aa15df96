"""
SKU Service

Composes SKUs of the form ``<prefix><separator><ciphertext>`` around the
monoalphabetic cipher and parses them back.

Secret key priority: explicit argument > MONO_CIPHER_KEY environment
variable (via settings) > built-in default.
"""
import logging
from functools import lru_cache
from typing import Optional

from monocipher.config import get_settings
from monocipher.core.crypto.monoalphabetic_cipher import MonoalphabeticCipher
from monocipher.models.sku import DecodedSku


logger = logging.getLogger(__name__)


def resolve_secret_key(secret_key: Optional[str] = None) -> str:
    """
    Resolve the secret key to hand to the cipher.

    An explicit key always wins, including the empty string.
    """
    if secret_key is not None:
        return secret_key
    return get_settings().mono_cipher_key


@lru_cache(maxsize=32)
def _build_cipher(secret_key: str, include_slash: bool) -> MonoalphabeticCipher:
    """Construct a cipher (cached; instances are immutable)."""
    return MonoalphabeticCipher(secret_key, include_slash=include_slash)


def get_cipher(
    secret_key: Optional[str] = None,
    include_slash: Optional[bool] = None,
) -> MonoalphabeticCipher:
    """
    Get a cipher for the resolved key and alphabet.

    Args:
        secret_key: Explicit key, or None to use settings
        include_slash: Alphabet variant, or None to use settings

    Returns:
        Shared MonoalphabeticCipher instance
    """
    if include_slash is None:
        include_slash = get_settings().include_slash
    return _build_cipher(resolve_secret_key(secret_key), include_slash)


def clear_cipher_cache() -> None:
    """Drop cached cipher instances (e.g. after a key rotation)."""
    _build_cipher.cache_clear()


def encrypt(text: str, secret_key: Optional[str] = None) -> str:
    """Encrypt ``text`` with the resolved key."""
    return get_cipher(secret_key).encrypt(text)


def decrypt(text: str, secret_key: Optional[str] = None) -> str:
    """Decrypt ``text`` with the resolved key."""
    return get_cipher(secret_key).decrypt(text)


def _check_separator(cipher: MonoalphabeticCipher, separator: str) -> None:
    # A separator inside the alphabet could appear in the ciphertext
    if separator in cipher.alphabet:
        raise ValueError(
            f"SKU separator '{separator}' is part of the cipher alphabet"
        )


def generate_sku(
    product_id: str,
    prefix: Optional[str] = None,
    secret_key: Optional[str] = None,
) -> str:
    """
    Generate a SKU for a product id.

    Args:
        product_id: Identifier to encrypt
        prefix: Storefront prefix (defaults to settings.sku_prefix)
        secret_key: Explicit key, or None to use settings

    Returns:
        SKU in the form "<prefix><separator><encrypted id>"

    Raises:
        ValueError: If the prefix contains the separator, or the separator
            belongs to the cipher alphabet
    """
    settings = get_settings()
    separator = settings.sku_separator
    if prefix is None:
        prefix = settings.sku_prefix

    if separator in prefix:
        raise ValueError(f"SKU prefix must not contain '{separator}'")

    cipher = get_cipher(secret_key)
    _check_separator(cipher, separator)

    return f"{prefix}{separator}{cipher.encrypt(product_id)}"


def decode_sku(sku: str, secret_key: Optional[str] = None) -> DecodedSku:
    """
    Decode a SKU back to its prefix and product id.

    The SKU is split on the first separator, so product ids that contain
    the separator survive the round trip.

    Raises:
        ValueError: If the separator is missing or belongs to the alphabet
    """
    separator = get_settings().sku_separator
    cipher = get_cipher(secret_key)
    _check_separator(cipher, separator)

    prefix, found, encrypted = sku.partition(separator)
    if not found:
        raise ValueError(f"Invalid SKU format: missing '{separator}' separator")

    return DecodedSku(prefix=prefix, product_id=cipher.decrypt(encrypted))
