"""
SKU Value Objects

Purpose:
- Carry the parts of a decoded SKU
- Never contain the secret key
"""

from dataclasses import dataclass


SKU_TYPE = "monoalphabetic"


@dataclass(frozen=True)
class DecodedSku:
    """
    Result of splitting and decrypting a SKU.

    Attributes:
        prefix: Storefront prefix (e.g. 'si', 'ys')
        product_id: Decrypted product identifier
        type: Cipher family that produced the SKU
    """
    prefix: str
    product_id: str
    type: str = SKU_TYPE


@dataclass(frozen=True)
class ResolvedProduct:
    """
    Storefront location of a decoded SKU.

    Attributes:
        url: Base URL for the prefix followed by the product id
        prefix: Storefront prefix
        product_id: Decrypted product identifier
    """
    url: str
    prefix: str
    product_id: str
