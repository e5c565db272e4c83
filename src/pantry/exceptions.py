"""Typed failures raised by the pantry domain.

All of them ride on Protean's exception hierarchy so that callers (and the
FastAPI exception handlers) can treat them by kind:

    ObjectNotFoundError   -> a referenced item, cart, cart line or order is missing
    ValidationError       -> the request conflicts with current state
    InvalidOperationError -> the requester may not touch the resource
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class ItemNotFound(ObjectNotFoundError):
    def __init__(self, item_id):
        self.item_id = str(item_id)
        super().__init__({"item_id": [f"Item {self.item_id} not found"]})


class NoActiveCart(ObjectNotFoundError):
    def __init__(self, user_id):
        self.user_id = str(user_id)
        super().__init__({"cart": [f"No active cart found for user {self.user_id}"]})


class CartItemNotFound(ObjectNotFoundError):
    def __init__(self, cart_item_id):
        self.cart_item_id = str(cart_item_id)
        super().__init__({"cart_item_id": [f"Cart item {self.cart_item_id} not found in your cart"]})


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        self.order_id = str(order_id)
        super().__init__({"order_id": [f"Order {self.order_id} not found"]})


# ---------------------------------------------------------------------------
# State conflicts
# ---------------------------------------------------------------------------
class ItemUnavailable(ValidationError):
    def __init__(self, item_id, name=None):
        self.item_id = str(item_id)
        self.name = name
        super().__init__({"item_id": [f"Item no longer available: {name or self.item_id}"]})


class InsufficientStock(ValidationError):
    def __init__(self, item_id, requested, available, name=None):
        self.item_id = str(item_id)
        self.requested = requested
        self.available = available
        self.name = name
        super().__init__(
            {
                "quantity": [
                    f"Insufficient quantity for {name or self.item_id}: requested {requested}, available {available}"
                ]
            }
        )


class EmptyCart(ValidationError):
    def __init__(self, cart_id):
        self.cart_id = str(cart_id)
        super().__init__({"cart": ["Cart is empty"]})


class InvalidTransition(ValidationError):
    def __init__(self, current, target, reason=None):
        self.current = current
        self.target = target
        super().__init__({"status": [reason or f"Cannot transition from {current} to {target}"]})


class CannotAssign(ValidationError):
    def __init__(self, order_id, status):
        self.order_id = str(order_id)
        self.status = status
        super().__init__({"assigned_to_id": [f"Cannot assign staff to an order that is {status}"]})


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------
class Unauthorized(InvalidOperationError):
    def __init__(self, requester_id, action="access this order"):
        self.requester_id = str(requester_id) if requester_id is not None else None
        self.action = action
        super().__init__({"requester": [f"Unauthorized to {action}"]})
