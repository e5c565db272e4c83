"""Pantry API package."""

from pantry.api.errors import register_error_handlers
from pantry.api.routes import cart_router, item_router, order_router, pantry_router

__all__ = ["item_router", "cart_router", "order_router", "pantry_router", "register_error_handlers"]
