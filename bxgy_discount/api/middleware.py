"""Shop scoping middleware using ContextVar.

Extracts the calling shop from the X-Shopify-Shop-Domain request header. The
domain is stored in a ContextVar so route handlers can tag their log lines
with get_current_shop() without threading it through every call.
"""

from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# ---------------------------------------------------------------------------
# Context variable
# ---------------------------------------------------------------------------

SHOP_HEADER = "X-Shopify-Shop-Domain"

_current_shop: ContextVar[str] = ContextVar("current_shop", default="unknown")


def get_current_shop() -> str:
    """Return the shop domain for the current request."""
    return _current_shop.get()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class ShopMiddleware(BaseHTTPMiddleware):
    """Record the shop domain from the request headers.

    Falls back to "unknown" when the header is missing.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        shop = request.headers.get(SHOP_HEADER, "").strip().lower()

        token = _current_shop.set(shop or "unknown")
        try:
            response = await call_next(request)
            return response
        finally:
            _current_shop.reset(token)
