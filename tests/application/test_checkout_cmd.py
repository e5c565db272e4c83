"""Application tests for checkout."""

import pytest
from pantry.cart.cart import Cart, CartStatus
from pantry.cart.items import AddToCart
from pantry.cart.management import OpenCart
from pantry.cart.queries import current_cart
from pantry.checkout.checkout import Checkout
from pantry.exceptions import EmptyCart, InsufficientStock, ItemUnavailable, NoActiveCart
from pantry.inventory.item import Item
from pantry.inventory.stocking import DiscontinueItem, SetItemAvailability, StockItem
from pantry.order.lifecycle import UpdateOrderStatus
from pantry.order.order import Order, OrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _stock_item(name="Cereal", quantity=10):
    return current_domain.process(
        StockItem(name=name, pantry_id="pantry-001", quantity=quantity),
        asynchronous=False,
    )


def _add(item_id, quantity=1, user_id="user-001"):
    return current_domain.process(
        AddToCart(user_id=user_id, pantry_id="pantry-001", item_id=item_id, quantity=quantity),
        asynchronous=False,
    )


def _checkout(notes="", user_id="user-001"):
    return current_domain.process(Checkout(user_id=user_id, notes=notes), asynchronous=False)


class TestCheckout:
    def test_checkout_creates_pending_order(self):
        item_id = _stock_item()
        cart = _add(item_id, 2)

        order = _checkout(notes="leave at door")

        saved = current_domain.repository_for(Order).get(order.id)
        assert saved.status == OrderStatus.PENDING.value
        assert saved.cart_id == cart.id
        assert saved.user_id == "user-001"
        assert saved.pantry_id == "pantry-001"
        assert saved.notes == "leave at door"

    def test_checkout_submits_cart(self):
        cart = _add(_stock_item(), 1)
        _checkout()

        assert current_domain.repository_for(Cart).get(cart.id).status == CartStatus.SUBMITTED.value
        assert current_cart("user-001") is None

    def test_checkout_leaves_stock_untouched(self):
        item_id = _stock_item(quantity=5)
        _add(item_id, 3)
        _checkout()
        assert current_domain.repository_for(Item).get(item_id).quantity == 5

    def test_next_add_opens_a_new_cart(self):
        item_id = _stock_item()
        first = _add(item_id, 1)
        _checkout()
        second = _add(item_id, 1)
        assert second.id != first.id
        assert second.status == CartStatus.ACTIVE.value

    def test_no_active_cart(self):
        with pytest.raises(NoActiveCart):
            _checkout()

    def test_empty_cart(self):
        current_domain.process(OpenCart(user_id="user-001", pantry_id="pantry-001"), asynchronous=False)
        with pytest.raises(EmptyCart):
            _checkout()

    def test_stock_shortfall_leaves_cart_active(self):
        item_id = _stock_item(quantity=5)
        _add(item_id, 4)

        repo = current_domain.repository_for(Item)
        item = repo.get(item_id)
        item.quantity = 2
        repo.add(item)

        with pytest.raises(InsufficientStock):
            _checkout()
        assert current_cart("user-001") is not None
        assert len(current_domain.repository_for(Order)._dao.query.all().items) == 0

    def test_unavailable_item_blocks_checkout(self):
        item_id = _stock_item()
        _add(item_id, 1)
        current_domain.process(SetItemAvailability(item_id=item_id, is_available=False), asynchronous=False)

        with pytest.raises(ItemUnavailable):
            _checkout()

    def test_discontinued_item_blocks_checkout(self):
        item_id = _stock_item()
        _add(item_id, 1)
        current_domain.process(DiscontinueItem(item_id=item_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            _checkout()
        assert current_cart("user-001") is not None

    def test_second_checkout_without_new_cart(self):
        _add(_stock_item(), 1)
        _checkout()
        with pytest.raises(NoActiveCart):
            _checkout()


class TestLeaveAtDoorScenario:
    def test_checkout_then_pickup(self):
        item_id = _stock_item(name="Apples", quantity=10)
        cart = _add(item_id, 4)
        order = _checkout(notes="leave at door")

        assert order.status == OrderStatus.PENDING.value
        assert order.notes == "leave at door"
        assert order.pantry_id == "pantry-001"
        assert current_domain.repository_for(Cart).get(cart.id).status == CartStatus.SUBMITTED.value

        order = current_domain.process(UpdateOrderStatus(order_id=order.id, status="preparing"), asynchronous=False)
        assert order.ready_at is None
        assert order.picked_up_at is None

        order = current_domain.process(UpdateOrderStatus(order_id=order.id, status="ready"), asynchronous=False)
        assert order.ready_at is not None
        assert order.picked_up_at is None

        order = current_domain.process(UpdateOrderStatus(order_id=order.id, status="picked_up"), asynchronous=False)
        assert order.picked_up_at is not None

        saved = current_domain.repository_for(Order).get(order.id)
        assert saved.status == OrderStatus.PICKED_UP.value
        assert saved.ready_at <= saved.picked_up_at
