"""FastAPI routes for the pantry domain: items, carts and orders.

The acting identity is resolved upstream (gateway / auth middleware) and
arrives as ``X-User-Id`` and ``X-User-Role`` headers.
"""

from dataclasses import dataclass
from typing import Literal

from fastapi import APIRouter, Depends, Header, Query
from protean.utils.globals import current_domain

from pantry.api.schemas import (
    AddToCartRequest,
    AssignStaffRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    CurrentCartResponse,
    ItemIdResponse,
    ItemResponse,
    OrderPageResponse,
    OrderResponse,
    OrderStatusValue,
    RestockItemRequest,
    SetAvailabilityRequest,
    StatusResponse,
    StockItemRequest,
    UpdateCartQuantityRequest,
    UpdateStatusRequest,
)
from pantry.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from pantry.cart.management import ClearCart
from pantry.cart.queries import current_cart
from pantry.checkout.checkout import Checkout
from pantry.inventory.item import Item
from pantry.inventory.stocking import DiscontinueItem, RestockItem, SetItemAvailability, StockItem
from pantry.order.access import Role, ensure_admin
from pantry.order.cancellation import CancelOrder
from pantry.order.lifecycle import AssignStaff, UpdateOrderStatus
from pantry.order.queries import DEFAULT_PAGE_SIZE, get_order, list_orders, list_pantry_orders


@dataclass(frozen=True)
class Requester:
    user_id: str
    role: Role

    @property
    def is_admin(self):
        return self.role == Role.ADMIN


def get_requester(
    x_user_id: str = Header(),
    x_user_role: Literal["admin", "user"] = Header(default="user"),
) -> Requester:
    return Requester(user_id=x_user_id, role=Role(x_user_role))


def get_admin(requester: Requester = Depends(get_requester)) -> Requester:
    ensure_admin(requester.role, requester.user_id)
    return requester


# ---------------------------------------------------------------------------
# Item Router
# ---------------------------------------------------------------------------
item_router = APIRouter(prefix="/items", tags=["items"])


@item_router.post("", status_code=201, response_model=ItemIdResponse)
async def stock_item(body: StockItemRequest, admin: Requester = Depends(get_admin)) -> ItemIdResponse:  # noqa: ARG001
    command = StockItem(
        name=body.name,
        pantry_id=body.pantry_id,
        quantity=body.quantity,
        low_stock_threshold=body.low_stock_threshold,
        unit=body.unit,
        is_available=body.is_available,
    )
    result = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=result)


@item_router.get("/{item_id}", response_model=ItemResponse)
async def read_item(item_id: str) -> ItemResponse:
    item = current_domain.repository_for(Item).get_item(item_id)
    return ItemResponse.from_item(item)


@item_router.post("/{item_id}/restock", response_model=StatusResponse)
async def restock_item(
    item_id: str,
    body: RestockItemRequest,
    admin: Requester = Depends(get_admin),  # noqa: ARG001
) -> StatusResponse:
    command = RestockItem(item_id=item_id, quantity=body.quantity, reference=body.reference)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@item_router.put("/{item_id}/availability", response_model=StatusResponse)
async def set_item_availability(
    item_id: str,
    body: SetAvailabilityRequest,
    admin: Requester = Depends(get_admin),  # noqa: ARG001
) -> StatusResponse:
    command = SetItemAvailability(item_id=item_id, is_available=body.is_available)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@item_router.delete("/{item_id}", response_model=StatusResponse)
async def discontinue_item(item_id: str, admin: Requester = Depends(get_admin)) -> StatusResponse:  # noqa: ARG001
    current_domain.process(DiscontinueItem(item_id=item_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/current", response_model=CurrentCartResponse)
async def read_current_cart(requester: Requester = Depends(get_requester)) -> CurrentCartResponse:
    cart = current_cart(requester.user_id)
    if cart is None:
        return CurrentCartResponse()

    body = CartResponse.from_cart(cart)
    return CurrentCartResponse(cart=body, items=body.items, count=body.count)


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, requester: Requester = Depends(get_requester)) -> CartResponse:
    command = AddToCart(
        user_id=requester.user_id,
        pantry_id=body.pantry_id,
        item_id=body.item_id,
        quantity=body.quantity,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart)


@cart_router.put("/items/{cart_item_id}", response_model=CartResponse)
async def update_cart_item_quantity(
    cart_item_id: str,
    body: UpdateCartQuantityRequest,
    requester: Requester = Depends(get_requester),
) -> CartResponse:
    command = UpdateCartQuantity(
        user_id=requester.user_id,
        cart_item_id=cart_item_id,
        new_quantity=body.quantity,
    )
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart)


@cart_router.delete("/items/{cart_item_id}", response_model=CartResponse)
async def remove_cart_item(cart_item_id: str, requester: Requester = Depends(get_requester)) -> CartResponse:
    command = RemoveFromCart(user_id=requester.user_id, cart_item_id=cart_item_id)
    cart = current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart)


@cart_router.delete("/current", response_model=StatusResponse)
async def clear_cart(requester: Requester = Depends(get_requester)) -> StatusResponse:
    current_domain.process(ClearCart(user_id=requester.user_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout_cart(body: CheckoutRequest, requester: Requester = Depends(get_requester)) -> CheckoutResponse:
    command = Checkout(user_id=requester.user_id, notes=body.notes)
    order = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(order=OrderResponse.from_order(order))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderPageResponse)
async def read_orders(
    status: OrderStatusValue | None = None,
    page: int = 1,
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    requester: Requester = Depends(get_requester),
) -> OrderPageResponse:
    result = list_orders(
        requester.user_id,
        is_admin=requester.is_admin,
        status=status,
        page=page,
        page_size=page_size,
    )
    return OrderPageResponse.from_page(result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str, requester: Requester = Depends(get_requester)) -> OrderResponse:
    order = get_order(order_id, requester.user_id, is_admin=requester.is_admin)
    return OrderResponse.from_order(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateStatusRequest,
    admin: Requester = Depends(get_admin),  # noqa: ARG001
) -> OrderResponse:
    order = current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.put("/{order_id}/assign", response_model=OrderResponse)
async def assign_staff(
    order_id: str,
    body: AssignStaffRequest,
    admin: Requester = Depends(get_admin),  # noqa: ARG001
) -> OrderResponse:
    order = current_domain.process(AssignStaff(order_id=order_id, staff_id=body.staff_id), asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, requester: Requester = Depends(get_requester)) -> OrderResponse:
    command = CancelOrder(
        order_id=order_id,
        requester_id=requester.user_id,
        is_admin=requester.is_admin,
    )
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


# ---------------------------------------------------------------------------
# Pantry Router (staff console)
# ---------------------------------------------------------------------------
pantry_router = APIRouter(prefix="/pantries", tags=["pantries"])


@pantry_router.get("/{pantry_id}/orders", response_model=OrderPageResponse)
async def read_pantry_orders(
    pantry_id: str,
    status: OrderStatusValue | None = None,
    page: int = 1,
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    admin: Requester = Depends(get_admin),  # noqa: ARG001
) -> OrderPageResponse:
    result = list_pantry_orders(pantry_id, status=status, page=page, page_size=page_size)
    return OrderPageResponse.from_page(result)
