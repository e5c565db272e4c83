"""Domain events for the Item aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from pantry.domain import pantry


@pantry.event(part_of="Item")
class ItemStocked:
    """A new item was put on a pantry's shelves."""

    __version__ = 1

    item_id = Identifier(required=True)
    pantry_id = Identifier(required=True)
    name = String(required=True)
    quantity = Integer(required=True)
    stocked_at = DateTime(required=True)


@pantry.event(part_of="Item")
class ItemRestocked:
    """Quantity was added back to an item (donation received or order cancelled)."""

    __version__ = 1

    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    reference = String()
    restocked_at = DateTime(required=True)


@pantry.event(part_of="Item")
class ItemAvailabilityChanged:
    """An item was enabled or disabled for shoppers."""

    __version__ = 1

    item_id = Identifier(required=True)
    is_available = Boolean(required=True)
    changed_at = DateTime(required=True)
