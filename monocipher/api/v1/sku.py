"""
SKU API endpoints.

Provides endpoints for:
- SKU generation from a product id
- SKU decoding back to prefix and product id
- SKU resolution to a storefront URL
"""
from fastapi import APIRouter, Depends, HTTPException, status

from monocipher.config import Settings
from monocipher.core.dependencies import get_app_settings
from monocipher.models.schemas import (
    GenerateSkuRequest,
    SkuResponse,
    DecodeSkuRequest,
    DecodedSkuResponse,
    ResolvedProductResponse,
    ErrorResponse,
)
from monocipher.services.sku_service import generate_sku, decode_sku
from monocipher.services.site_resolver import resolve_product_url


router = APIRouter(prefix="/sku", tags=["SKU"])


@router.post(
    "/generate",
    response_model=SkuResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Generate a SKU",
    description="Encrypt a product id and prepend the storefront prefix."
)
async def create_sku(
    request: GenerateSkuRequest,
    settings: Settings = Depends(get_app_settings),
):
    prefix = request.prefix if request.prefix is not None else settings.sku_prefix

    try:
        sku = generate_sku(
            request.product_id,
            prefix=prefix,
            secret_key=request.secret_key,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return SkuResponse(sku=sku, prefix=prefix)


@router.post(
    "/decode",
    response_model=DecodedSkuResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Decode a SKU",
    description="Split a SKU on its separator and decrypt the product id."
)
async def read_sku(request: DecodeSkuRequest):
    try:
        decoded = decode_sku(request.sku, secret_key=request.secret_key)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return DecodedSkuResponse(
        prefix=decoded.prefix,
        product_id=decoded.product_id,
        type=decoded.type,
    )


@router.post(
    "/resolve",
    response_model=ResolvedProductResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Resolve a SKU to a product URL",
    description="Decode a SKU and build the storefront URL for its prefix."
)
async def resolve_sku(request: DecodeSkuRequest):
    """
    Resolve a SKU to the product page it refers to.

    Unknown prefixes and malformed SKUs are rejected with 400.
    """
    try:
        resolved = resolve_product_url(request.sku, secret_key=request.secret_key)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return ResolvedProductResponse(
        url=resolved.url,
        prefix=resolved.prefix,
        product_id=resolved.product_id,
    )
