"""Discount function API: FastAPI entry point.

Serves the discount function over HTTP for local development and for hosts
that call it as a service rather than embedding it.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from bxgy_discount import __version__
from bxgy_discount.api.middleware import ShopMiddleware
from bxgy_discount.api.router import router, settings
from bxgy_discount.utils.logger import get_logger, set_level

logger = get_logger("api")


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    set_level(settings.log_level)
    logger.info("Discount function API started")
    yield
    logger.info("Discount function API shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="BXGY Discount Function",
    description="Buy-X-get-Y, tiered, volume and frequently-bought-together bundle discounts",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(ShopMiddleware)

app.include_router(router, tags=["Discounts"])


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}
