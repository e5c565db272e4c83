"""Order cancellation — command and handler.

Cancelling puts every line of the originating cart back on the shelf. The
restoration is best-effort: a line whose item has since been removed is
skipped, so a cancellation always goes through.
"""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from pantry.cart.cart import Cart
from pantry.domain import pantry
from pantry.exceptions import ItemNotFound
from pantry.inventory.item import Item
from pantry.order.access import ensure_permitted, role_for
from pantry.order.order import Order

logger = structlog.get_logger(__name__)


@pantry.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    is_admin = Boolean(default=False)


def restore_inventory(order, cart) -> int:
    """Restock every line of ``cart``; return how many lines were restored."""
    if cart is None:
        logger.warning("Originating cart not found, nothing to restore", order_id=str(order.id))
        return 0

    item_repo = current_domain.repository_for(Item)
    restored = 0
    for line in cart.items:
        try:
            item = item_repo.get_item(line.item_id)
        except ItemNotFound:
            logger.warning(
                "Skipping restoration for missing item",
                order_id=str(order.id),
                item_id=str(line.item_id),
                quantity=line.quantity,
            )
            continue

        item.restock(line.quantity, reference=f"order_cancelled:{order.id}")
        item_repo.add(item)
        restored += 1

    return restored


@pantry.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)

        ensure_permitted(role_for(command.is_admin), command.requester_id, order.user_id, action="cancel this order")
        order.ensure_cancellable()

        cart = current_domain.repository_for(Cart).find(order.cart_id)
        restored = restore_inventory(order, cart)

        order.cancel(cancelled_by=command.requester_id, restored_lines=restored)
        repo.add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            cancelled_by=str(command.requester_id),
            restored_lines=restored,
        )
        return order
