"""Pydantic request/response schemas for the pantry API.

These are external contracts, kept separate from the Protean commands.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

OrderStatusValue = Literal["pending", "preparing", "ready", "picked_up", "cancelled"]


# ---------------------------------------------------------------------------
# Item Schemas
# ---------------------------------------------------------------------------
class StockItemRequest(BaseModel):
    name: str
    pantry_id: str
    quantity: int = Field(ge=0, default=0)
    low_stock_threshold: int = Field(ge=0, default=10)
    unit: str = "count"
    is_available: bool = True


class RestockItemRequest(BaseModel):
    quantity: int = Field(ge=1)
    reference: str | None = None


class SetAvailabilityRequest(BaseModel):
    is_available: bool


class ItemIdResponse(BaseModel):
    item_id: str


class ItemResponse(BaseModel):
    id: str
    name: str
    pantry_id: str
    quantity: int
    low_stock_threshold: int
    unit: str
    is_available: bool
    is_low_stock: bool

    @classmethod
    def from_item(cls, item) -> "ItemResponse":
        return cls(
            id=str(item.id),
            name=item.name,
            pantry_id=str(item.pantry_id),
            quantity=item.quantity,
            low_stock_threshold=item.low_stock_threshold,
            unit=item.unit,
            is_available=item.is_available,
            is_low_stock=item.is_low_stock,
        )


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    item_id: str
    pantry_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "item_id": "b7a1c2de-0000-4000-8000-000000000001",
                    "pantry_id": "3f2e1d0c-0000-4000-8000-000000000002",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=0)


class CheckoutRequest(BaseModel):
    notes: str = ""


class CartItemResponse(BaseModel):
    id: str
    item_id: str
    quantity: int


class CartResponse(BaseModel):
    id: str
    user_id: str
    pantry_id: str
    status: str
    items: list[CartItemResponse]
    count: int

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        items = [CartItemResponse(id=str(i.id), item_id=str(i.item_id), quantity=i.quantity) for i in cart.items]
        return cls(
            id=str(cart.id),
            user_id=str(cart.user_id),
            pantry_id=str(cart.pantry_id),
            status=cart.status,
            items=items,
            count=len(items),
        )


class CurrentCartResponse(BaseModel):
    cart: CartResponse | None = None
    items: list[CartItemResponse] = []
    count: int = 0


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class UpdateStatusRequest(BaseModel):
    status: OrderStatusValue


class AssignStaffRequest(BaseModel):
    staff_id: str


class OrderResponse(BaseModel):
    id: str
    cart_id: str
    user_id: str
    pantry_id: str
    status: str
    assigned_to_id: str | None = None
    notes: str | None = None
    submitted_at: datetime
    ready_at: datetime | None = None
    picked_up_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            cart_id=str(order.cart_id),
            user_id=str(order.user_id),
            pantry_id=str(order.pantry_id),
            status=order.status,
            assigned_to_id=str(order.assigned_to_id) if order.assigned_to_id else None,
            notes=order.notes,
            submitted_at=order.submitted_at,
            ready_at=order.ready_at,
            picked_up_at=order.picked_up_at,
        )


class CheckoutResponse(BaseModel):
    message: str = "Order created successfully"
    order: OrderResponse


class OrderPageResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    pages: int

    @classmethod
    def from_page(cls, page) -> "OrderPageResponse":
        return cls(
            orders=[OrderResponse.from_order(o) for o in page.orders],
            total=page.total,
            page=page.page,
            pages=page.pages,
        )


class StatusResponse(BaseModel):
    status: str = "ok"
