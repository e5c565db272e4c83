"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from pantry.domain import pantry


@pantry.event(part_of="Cart")
class CartOpened:
    """A user started a new active cart at a pantry."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    pantry_id = Identifier(required=True)
    opened_at = DateTime(required=True)


@pantry.event(part_of="Cart")
class CartItemAdded:
    """An item was added to the cart, or an existing line grew."""

    __version__ = 1

    cart_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@pantry.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was overwritten."""

    __version__ = 1

    cart_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@pantry.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    item_id = Identifier(required=True)


@pantry.event(part_of="Cart")
class CartCleared:
    """Every line was removed; the cart stays active."""

    __version__ = 1

    cart_id = Identifier(required=True)
    removed_count = Integer(required=True)


@pantry.event(part_of="Cart")
class CartSubmitted:
    """The cart was checked out and can no longer change."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    line_count = Integer(required=True)
    submitted_at = DateTime(required=True)
