# storefront/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from storefront.core.config import get_settings
from storefront.dependencies import Storefront, build_storefront

# Routers
from storefront.routers.catalog import router as catalog_router
from storefront.routers.cart import router as cart_router
from storefront.routers.checkout import router as checkout_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Log the active tax rate and wallet availability.

    Shutdown:
      - Nothing to release; all state is in memory.
    """
    storefront: Storefront = app.state.storefront
    logger.info(
        "Storefront ready: tax rate %s, wallet available: %s",
        storefront.settings.TAX_RATE,
        storefront.view_model.is_payment_available,
    )
    yield
    logger.info("Storefront shutting down")


def create_app(storefront: Storefront | None = None) -> FastAPI:
    """
    Build the API around `storefront` (a default one from settings if None).
    """
    storefront = storefront or build_storefront()
    settings = storefront.settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.storefront = storefront

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Versioned API prefix, e.g. /api/v1
    app.include_router(catalog_router, prefix=settings.API_V1_STR)
    app.include_router(cart_router, prefix=settings.API_V1_STR)
    app.include_router(checkout_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "express-checkout-storefront"}

    return app


app = create_app(build_storefront(get_settings()))
