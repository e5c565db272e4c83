"""Pantry bounded context — Cart, Checkout and Order fulfillment.

Holds the shared inventory counter (Item), the shopper's cart, the one-way
checkout that turns a cart into a pending order, and the order lifecycle
that pantry staff drive to pickup or cancellation.
"""

from protean.domain import Domain

from pantry.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
pantry = Domain(name="pantry")
