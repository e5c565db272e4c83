"""Order aggregate — a submitted cart being prepared for pickup.

State Machine:
    PENDING → PREPARING → READY → PICKED_UP
    CANCELLED (from PENDING, PREPARING or READY)

PICKED_UP and CANCELLED are terminal. Entering READY stamps ``ready_at``;
entering PICKED_UP stamps ``picked_up_at``. The owner-facing cancellation
path is narrower than the table: only PENDING and PREPARING orders can be
cancelled that way, and it is the only path that puts stock back.

Orders are never deleted; cancellation is a status.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from pantry.domain import pantry
from pantry.exceptions import CannotAssign, InvalidTransition
from pantry.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged, StaffAssigned


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked_up"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.PICKED_UP, OrderStatus.CANCELLED},
    OrderStatus.PICKED_UP: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# States from which the owner (or an admin) may cancel
_CANCELLABLE_STATES = {
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
}

_TERMINAL_STATES = {status for status, targets in _VALID_TRANSITIONS.items() if not targets}


def can_transition(current, target) -> bool:
    """True when ``current → target`` is an edge of the transition map."""
    return OrderStatus(target) in _VALID_TRANSITIONS.get(OrderStatus(current), set())


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@pantry.aggregate
class Order:
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    pantry_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    assigned_to_id = Identifier()
    notes = Text()
    submitted_at = DateTime(required=True)
    ready_at = DateTime()
    picked_up_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, cart, notes=None):
        """Build a PENDING order from ``cart``. The order is not persisted here."""
        now = datetime.now(UTC)
        order = cls(
            cart_id=cart.id,
            user_id=cart.user_id,
            pantry_id=cart.pantry_id,
            status=OrderStatus.PENDING.value,
            notes=notes or "",
            submitted_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                cart_id=str(cart.id),
                user_id=str(cart.user_id),
                pantry_id=str(cart.pantry_id),
                notes=order.notes,
                submitted_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def is_terminal(self):
        return OrderStatus(self.status) in _TERMINAL_STATES

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise InvalidTransition(current.value, target_status.value)

    def _move_to(self, target_status, now):
        previous = self.status
        self.status = target_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target_status.value,
                changed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        """Move to ``new_status`` if the transition map allows it."""
        try:
            target = OrderStatus(new_status.value if isinstance(new_status, OrderStatus) else new_status)
        except ValueError as exc:
            raise InvalidTransition(self.status, str(new_status), reason=f"Unknown order status: {new_status}") from exc

        self._assert_can_transition(target)

        now = datetime.now(UTC)
        if target == OrderStatus.READY:
            self.ready_at = now
        elif target == OrderStatus.PICKED_UP:
            self.picked_up_at = now

        self._move_to(target, now)

    def assign_staff(self, staff_id):
        """Put ``staff_id`` in charge, replacing any earlier assignment."""
        if self.is_terminal:
            raise CannotAssign(self.id, self.status)

        previous_staff_id = self.assigned_to_id
        self.assigned_to_id = staff_id
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StaffAssigned(
                order_id=str(self.id),
                staff_id=str(staff_id),
                previous_staff_id=str(previous_staff_id) if previous_staff_id else None,
                assigned_at=now,
            )
        )

    def ensure_cancellable(self):
        current = OrderStatus(self.status)
        if current not in _CANCELLABLE_STATES:
            raise InvalidTransition(
                current.value,
                OrderStatus.CANCELLED.value,
                reason=(
                    f"Cannot cancel order in {current.value} state. "
                    f"Cancellation is only allowed from: "
                    f"{', '.join(sorted(s.value for s in _CANCELLABLE_STATES))}"
                ),
            )

    def cancel(self, cancelled_by, restored_lines=0):
        """Cancel a PENDING or PREPARING order.

        Stock restoration is done by the caller, which owns the inventory
        repository; ``restored_lines`` only records how many lines went back.
        """
        self.ensure_cancellable()

        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=previous,
                cancelled_by=str(cancelled_by),
                restored_lines=restored_lines,
                cancelled_at=now,
            )
        )
