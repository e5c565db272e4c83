"""Checkout transition — turn an active cart into a pending order.

``checkout_cart`` re-validates every line against current stock, builds the
Order and flips the cart to SUBMITTED, all in memory. Persisting the cart
and the order is left to the caller.

Stock is not decremented at checkout. Quantity only ever moves back up, on
cancellation.
"""

from pantry.exceptions import EmptyCart
from pantry.order.order import Order


def checkout_cart(cart, notes, lookup_item) -> Order:
    """Validate ``cart`` and return the unsaved Order it becomes.

    ``lookup_item(item_id)`` must return the current Item or raise
    ``ItemNotFound``.
    """
    if not cart.items:
        raise EmptyCart(cart.id)

    for line in cart.items:
        item = lookup_item(line.item_id)
        item.ensure_can_supply(line.quantity)

    order = Order.place(cart, notes=notes)
    cart.submit()
    return order
