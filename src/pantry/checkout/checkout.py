"""Checkout — command and handler.

The handler is the caller of the checkout transition: it loads the user's
active cart, runs the transition, and persists the submitted cart together
with the new order.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from pantry.cart.cart import Cart
from pantry.checkout.transition import checkout_cart
from pantry.domain import pantry
from pantry.inventory.item import Item
from pantry.order.order import Order

logger = structlog.get_logger(__name__)


@pantry.command(part_of="Order")
class Checkout:
    user_id = Identifier(required=True)
    notes = Text()


@pantry.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get_active_for(command.user_id)

        item_repo = current_domain.repository_for(Item)
        order = checkout_cart(cart, command.notes, item_repo.get_item)

        cart_repo.add(cart)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Cart checked out",
            order_id=str(order.id),
            cart_id=str(cart.id),
            user_id=str(cart.user_id),
            line_count=len(cart.items),
        )
        return order
