"""Cart aggregate — one user's in-progress selection at one pantry.

A user holds at most one ACTIVE cart. The cart is created lazily on the first
add, accumulates lines (one per item), and is SUBMITTED exactly once at
checkout. A cart that has left ACTIVE is never reused.

Stock checks read the Item passed in at call time; nothing is reserved.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from pantry.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartOpened,
    CartQuantityUpdated,
    CartSubmitted,
)
from pantry.domain import pantry
from pantry.exceptions import CartItemNotFound, EmptyCart


class CartStatus(Enum):
    ACTIVE = "active"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


@pantry.entity(part_of="Cart")
class CartItem:
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@pantry.aggregate
class Cart:
    user_id = Identifier(required=True)
    pantry_id = Identifier(required=True)
    items = HasMany(CartItem)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, pantry_id):
        now = datetime.now(UTC)
        cart = cls(
            user_id=user_id,
            pantry_id=pantry_id,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(
            CartOpened(
                cart_id=str(cart.id),
                user_id=str(user_id),
                pantry_id=str(pantry_id),
                opened_at=now,
            )
        )
        return cart

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    @property
    def is_active(self):
        return CartStatus(self.status) == CartStatus.ACTIVE

    def line_for_item(self, item_id):
        """Return the line holding ``item_id``, or None."""
        return next((i for i in self.items if str(i.item_id) == str(item_id)), None)

    def line(self, cart_item_id):
        """Return the line with ``cart_item_id`` or raise ``CartItemNotFound``."""
        line = next((i for i in self.items if str(i.id) == str(cart_item_id)), None)
        if line is None:
            raise CartItemNotFound(cart_item_id)
        return line

    def _assert_active(self, action):
        if not self.is_active:
            raise ValidationError({"status": [f"Items can only be {action} an active cart"]})

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, item, quantity):
        """Add ``quantity`` of ``item`` (an inventory Item, only read here).

        An existing line for the same item grows in place. The stock check is
        made against the new cumulative amount and leaves the line untouched
        when it fails.
        """
        self._assert_active("added to")
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for_item(item.id)
        cumulative = quantity + (existing.quantity if existing else 0)
        item.ensure_can_supply(cumulative)

        now = datetime.now(UTC)
        if existing:
            existing.quantity = cumulative
            line = existing
        else:
            line = CartItem(item_id=item.id, quantity=quantity, added_at=now)
            self.add_items(line)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                cart_item_id=str(line.id),
                item_id=str(item.id),
                quantity=quantity,
                line_quantity=line.quantity,
            )
        )
        return line

    def update_item_quantity(self, cart_item_id, new_quantity, item=None):
        """Overwrite a line's quantity; zero removes the line.

        ``item`` is required for a non-zero quantity so that current stock can
        be re-checked.
        """
        self._assert_active("updated in")
        line = self.line(cart_item_id)

        if new_quantity == 0:
            self.remove_item(cart_item_id)
            return None
        if new_quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})
        if item is None:
            raise ValidationError({"item_id": ["Current stock is needed to update a quantity"]})

        item.ensure_can_supply(new_quantity)

        previous_quantity = line.quantity
        line.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                cart_item_id=str(line.id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return line

    def remove_item(self, cart_item_id):
        self._assert_active("removed from")
        line = self.line(cart_item_id)

        self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                cart_item_id=str(cart_item_id),
                item_id=str(line.item_id),
            )
        )

    def clear(self):
        """Remove every line. The cart stays active."""
        self._assert_active("cleared from")

        lines = list(self.items)
        for line in lines:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                removed_count=len(lines),
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def submit(self):
        """Mark the cart as submitted. There is no way back to ACTIVE."""
        if not self.is_active:
            raise ValidationError({"status": ["Only active carts can be submitted"]})
        if not self.items:
            raise EmptyCart(self.id)

        self.status = CartStatus.SUBMITTED.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartSubmitted(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                line_count=len(self.items),
                submitted_at=now,
            )
        )
