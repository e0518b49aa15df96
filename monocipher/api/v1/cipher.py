"""
Cipher API endpoints.

Provides endpoints for:
- Encrypting and decrypting text
- Round-trip self-check
- Substitution table diagnostics
- Configuration endpoint for clients
"""
from fastapi import APIRouter, Depends, HTTPException, status

from monocipher.config import Settings
from monocipher.core.crypto.monoalphabetic_cipher import (
    DEFAULT_SAMPLE_TEXT,
    MonoalphabeticCipher,
)
from monocipher.core.dependencies import get_app_settings, get_cipher_dependency
from monocipher.models.schemas import (
    TextRequest,
    TextResponse,
    ConsistencyRequest,
    ConsistencyResponse,
    CipherInfoResponse,
    ConfigResponse,
    ErrorResponse,
)
from monocipher.services.sku_service import get_cipher
from monocipher.services.site_resolver import get_site_map


router = APIRouter(tags=["Cipher"])


# ===========================================================
# Configuration
# ===========================================================

@router.get(
    "/config",
    response_model=ConfigResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Get configuration",
    description="Get alphabet and SKU formatting configuration."
)
async def get_config(settings: Settings = Depends(get_app_settings)):
    """
    Get configuration settings for clients.

    The secret key is never exposed. A site map that cannot be loaded
    is a server misconfiguration and is reported as 500.
    """
    try:
        site_map = get_site_map()
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return ConfigResponse(
        alphabet_size=len(settings.alphabet),
        include_slash=settings.include_slash,
        sku_prefix=settings.sku_prefix,
        sku_separator=settings.sku_separator,
        prefixes=sorted(site_map),
    )


# ===========================================================
# Encrypt / Decrypt
# ===========================================================

@router.post(
    "/cipher/encrypt",
    response_model=TextResponse,
    summary="Encrypt text",
    description="Substitute every alphanumeric character; other characters pass through."
)
async def encrypt_text(request: TextRequest):
    cipher = get_cipher(request.secret_key)
    return TextResponse(text=request.text, result=cipher.encrypt(request.text))


@router.post(
    "/cipher/decrypt",
    response_model=TextResponse,
    summary="Decrypt text",
    description="Reverse the substitution made by /cipher/encrypt with the same key."
)
async def decrypt_text(request: TextRequest):
    cipher = get_cipher(request.secret_key)
    return TextResponse(text=request.text, result=cipher.decrypt(request.text))


# ===========================================================
# Diagnostics
# ===========================================================

@router.post(
    "/cipher/consistency",
    response_model=ConsistencyResponse,
    summary="Round-trip self-check",
    description="Encrypt then decrypt a sample and report whether it survives."
)
async def check_consistency(request: ConsistencyRequest):
    sample_text = request.text if request.text is not None else DEFAULT_SAMPLE_TEXT
    cipher = get_cipher(request.secret_key)
    return ConsistencyResponse(
        consistent=cipher.test_consistency(sample_text),
        sample_text=sample_text,
    )


@router.get(
    "/cipher/info",
    response_model=CipherInfoResponse,
    summary="Table diagnostics",
    description="Report table sizes, completeness and sample mappings."
)
async def get_cipher_info(
    cipher: MonoalphabeticCipher = Depends(get_cipher_dependency),
):
    """
    Report diagnostics for the cipher built from the optional
    `secret_key` query parameter (or the configured key).
    """
    info = cipher.get_table_info()

    return CipherInfoResponse(
        alphabet_size=len(cipher.alphabet),
        forward_size=info.forward_size,
        inverse_size=info.inverse_size,
        is_complete=info.is_complete,
        sample_mappings=info.sample_mappings,
    )
