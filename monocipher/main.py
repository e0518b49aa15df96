import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from monocipher.config import get_settings
from monocipher.api.router import api_router
from monocipher.services.sku_service import get_cipher


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: build the default cipher once and self-check it
    cipher = get_cipher()
    if cipher.test_consistency():
        logger.info("Cipher ready (%d-character alphabet)", len(cipher.alphabet))
    else:
        logger.error("Cipher round-trip self-check failed")
    yield
    logger.info("Shutting down %s", app.title)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Deterministic monoalphabetic cipher for SKU obfuscation",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware (browser extension clients)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("monocipher.main:app", host="0.0.0.0", port=8000)
