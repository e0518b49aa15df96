from fastapi import APIRouter

from monocipher.api.v1.cipher import router as cipher_router
from monocipher.api.v1.sku import router as sku_router


api_router = APIRouter(prefix="/api/v1")
api_router.include_router(cipher_router)
api_router.include_router(sku_router)
