"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from pantry.domain import pantry


@pantry.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    pantry_id = Identifier(required=True)
    notes = Text()
    submitted_at = DateTime(required=True)


@pantry.event(part_of="Order")
class OrderStatusChanged:
    """The order moved along the fulfillment lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@pantry.event(part_of="Order")
class StaffAssigned:
    """A staff member was put in charge of preparing the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    staff_id = Identifier(required=True)
    previous_staff_id = Identifier()
    assigned_at = DateTime(required=True)


@pantry.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled by its owner or an admin."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = Identifier(required=True)
    restored_lines = Integer(default=0)
    cancelled_at = DateTime(required=True)
