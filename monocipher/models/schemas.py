from typing import Optional, List, Dict
from pydantic import BaseModel, Field


# ---------------------------------------------------------
# Cipher Schemas
# ---------------------------------------------------------

class TextRequest(BaseModel):
    """Request to encrypt or decrypt a piece of text."""
    text: str = Field(..., description="Text to transform")
    secret_key: Optional[str] = Field(
        None,
        description="Secret key (falls back to MONO_CIPHER_KEY / default)"
    )


class TextResponse(BaseModel):
    """Result of an encrypt or decrypt call."""
    text: str = Field(..., description="Input text")
    result: str = Field(..., description="Transformed text")


class ConsistencyRequest(BaseModel):
    """Request for the encrypt/decrypt round-trip self-check."""
    text: Optional[str] = Field(None, description="Sample text (default sample if omitted)")
    secret_key: Optional[str] = None


class ConsistencyResponse(BaseModel):
    """Outcome of the round-trip self-check."""
    consistent: bool
    sample_text: str


class CipherInfoResponse(BaseModel):
    """Diagnostic view of the substitution tables."""
    alphabet_size: int
    forward_size: int
    inverse_size: int
    is_complete: bool
    sample_mappings: Dict[str, str] = Field(
        default_factory=dict,
        description="Forward images of a few reference characters"
    )


# ---------------------------------------------------------
# SKU Schemas
# ---------------------------------------------------------

class GenerateSkuRequest(BaseModel):
    """Request to build a SKU from a product id."""
    product_id: str = Field(..., description="Product identifier to encrypt")
    prefix: Optional[str] = Field(
        None,
        description="Storefront prefix (e.g., si, ys, ms)"
    )
    secret_key: Optional[str] = None


class SkuResponse(BaseModel):
    """Generated SKU."""
    sku: str
    prefix: str


class DecodeSkuRequest(BaseModel):
    """Request to decode or resolve a SKU."""
    sku: str = Field(..., description="SKU in the form <prefix>@<encrypted id>")
    secret_key: Optional[str] = None


class DecodedSkuResponse(BaseModel):
    """Decoded SKU parts."""
    prefix: str
    product_id: str
    type: str = Field("monoalphabetic", description="Cipher family")


class ResolvedProductResponse(BaseModel):
    """Storefront URL for a SKU."""
    url: str
    prefix: str
    product_id: str


class ConfigResponse(BaseModel):
    """Configuration settings exposed to clients."""
    alphabet_size: int = Field(..., description="62, or 63 when '/' is included")
    include_slash: bool
    sku_prefix: str
    sku_separator: str
    prefixes: List[str] = Field(default_factory=list, description="Known storefront prefixes")


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
