"""Order lifecycle — status transitions and staff assignment.

Both commands are staff operations; the HTTP layer restricts them to admins.
Updates are last-writer-wins: no version check guards against a concurrent
update validated against the same stale status.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from pantry.domain import pantry
from pantry.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@pantry.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@pantry.command(part_of="Order")
class AssignStaff:
    order_id = Identifier(required=True)
    staff_id = Identifier(required=True)


@pantry.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        previous_status = order.status
        order.update_status(command.status)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
        )
        return order

    @handle(AssignStaff)
    def assign_staff(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        order.assign_staff(command.staff_id)
        repo.add(order)

        logger.info("Staff assigned to order", order_id=str(order.id), staff_id=str(command.staff_id))
        return order
