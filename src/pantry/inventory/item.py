"""Item aggregate — the shared stock counter shoppers draw from.

Item administration lives outside this context; what the pantry core needs
is a read-check-write view of one item's quantity and availability:

    ensure_can_supply()  -> checked when adding to a cart and at checkout
    restock()            -> the only quantity writer, used on cancellation

Stock is never decremented here. Checkout does not consume quantity, so
there is no reservation held between a check and a later write.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String

from pantry.domain import pantry
from pantry.exceptions import InsufficientStock, ItemUnavailable
from pantry.inventory.events import ItemAvailabilityChanged, ItemRestocked, ItemStocked

DEFAULT_LOW_STOCK_THRESHOLD = 10


@pantry.aggregate
class Item:
    name = String(required=True, max_length=255)
    pantry_id = Identifier(required=True)
    quantity = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(default=DEFAULT_LOW_STOCK_THRESHOLD, min_value=0)
    unit = String(max_length=20, default="count")  # e.g. "lb", "oz", "count"
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def stock(
        cls,
        name,
        pantry_id,
        quantity=0,
        low_stock_threshold=DEFAULT_LOW_STOCK_THRESHOLD,
        unit="count",
        is_available=True,
    ):
        now = datetime.now(UTC)
        item = cls(
            name=name,
            pantry_id=pantry_id,
            quantity=quantity,
            low_stock_threshold=low_stock_threshold,
            unit=unit,
            is_available=is_available,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            ItemStocked(
                item_id=str(item.id),
                pantry_id=str(pantry_id),
                name=name,
                quantity=quantity,
                stocked_at=now,
            )
        )
        return item

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_low_stock(self):
        return self.quantity <= self.low_stock_threshold

    def ensure_can_supply(self, quantity):
        """Raise unless ``quantity`` units could be handed out right now."""
        if not self.is_available:
            raise ItemUnavailable(self.id, name=self.name)
        if self.quantity < quantity:
            raise InsufficientStock(self.id, requested=quantity, available=self.quantity, name=self.name)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def restock(self, quantity, reference=None):
        """Add ``quantity`` units back to the counter."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous_quantity = self.quantity
        self.quantity = previous_quantity + quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ItemRestocked(
                item_id=str(self.id),
                quantity=quantity,
                previous_quantity=previous_quantity,
                new_quantity=self.quantity,
                reference=reference,
                restocked_at=now,
            )
        )

    def set_availability(self, is_available):
        if self.is_available == is_available:
            return

        self.is_available = is_available
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ItemAvailabilityChanged(
                item_id=str(self.id),
                is_available=is_available,
                changed_at=now,
            )
        )
