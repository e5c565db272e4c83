"""Application tests for cart commands."""

import pytest
from pantry.cart.cart import Cart, CartStatus
from pantry.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from pantry.cart.management import ClearCart, OpenCart
from pantry.cart.queries import current_cart
from pantry.exceptions import CartItemNotFound, InsufficientStock, ItemNotFound, ItemUnavailable, NoActiveCart
from pantry.inventory.stocking import SetItemAvailability, StockItem
from protean import current_domain
from protean.exceptions import ValidationError


def _stock_item(name="Soup", quantity=10):
    return current_domain.process(
        StockItem(name=name, pantry_id="pantry-001", quantity=quantity),
        asynchronous=False,
    )


def _add(item_id, quantity=1, user_id="user-001"):
    return current_domain.process(
        AddToCart(user_id=user_id, pantry_id="pantry-001", item_id=item_id, quantity=quantity),
        asynchronous=False,
    )


class TestOpenCart:
    def test_open_creates_cart(self):
        cart = current_domain.process(OpenCart(user_id="user-001", pantry_id="pantry-001"), asynchronous=False)
        assert cart.status == CartStatus.ACTIVE.value
        assert current_cart("user-001").id == cart.id

    def test_open_returns_existing_cart(self):
        first = current_domain.process(OpenCart(user_id="user-001", pantry_id="pantry-001"), asynchronous=False)
        second = current_domain.process(OpenCart(user_id="user-001", pantry_id="pantry-001"), asynchronous=False)
        assert first.id == second.id


class TestAddToCart:
    def test_first_add_creates_cart(self):
        assert current_cart("user-001") is None
        item_id = _stock_item()
        _add(item_id, 2)

        cart = current_cart("user-001")
        assert cart is not None
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_repeat_add_accumulates(self):
        item_id = _stock_item(quantity=10)
        _add(item_id, 2)
        _add(item_id, 3)

        cart = current_cart("user-001")
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_carts_are_per_user(self):
        item_id = _stock_item()
        _add(item_id, 1, user_id="user-001")
        _add(item_id, 1, user_id="user-002")
        assert current_cart("user-001").id != current_cart("user-002").id

    def test_insufficient_stock_does_not_create_cart(self):
        item_id = _stock_item(quantity=1)
        with pytest.raises(InsufficientStock):
            _add(item_id, 2)
        assert current_cart("user-001") is None

    def test_cumulative_over_stock_rejected(self):
        item_id = _stock_item(quantity=5)
        _add(item_id, 3)
        with pytest.raises(InsufficientStock):
            _add(item_id, 3)
        assert current_cart("user-001").items[0].quantity == 3

    @pytest.mark.parametrize("quantity", [1, 5, 50])
    def test_unavailable_item(self, quantity):
        item_id = _stock_item()
        current_domain.process(SetItemAvailability(item_id=item_id, is_available=False), asynchronous=False)
        with pytest.raises(ItemUnavailable):
            _add(item_id, quantity)

    def test_unknown_item(self):
        with pytest.raises(ItemNotFound):
            _add("missing-item", 1)

    def test_zero_quantity_rejected(self):
        item_id = _stock_item()
        with pytest.raises(ValidationError):
            _add(item_id, 0)


class TestUpdateCartQuantity:
    def test_update_quantity(self):
        item_id = _stock_item()
        cart = _add(item_id, 1)
        line_id = cart.items[0].id

        current_domain.process(
            UpdateCartQuantity(user_id="user-001", cart_item_id=line_id, new_quantity=4),
            asynchronous=False,
        )
        assert current_cart("user-001").items[0].quantity == 4

    def test_zero_removes_line(self):
        item_id = _stock_item()
        cart = _add(item_id, 1)
        line_id = cart.items[0].id

        current_domain.process(
            UpdateCartQuantity(user_id="user-001", cart_item_id=line_id, new_quantity=0),
            asynchronous=False,
        )
        assert len(current_cart("user-001").items) == 0

    def test_zero_removes_exactly_one_line(self):
        _add(_stock_item("Soup"), 1)
        cart = _add(_stock_item("Tea"), 1)
        line_id = cart.items[0].id

        current_domain.process(
            UpdateCartQuantity(user_id="user-001", cart_item_id=line_id, new_quantity=0),
            asynchronous=False,
        )
        remaining = current_cart("user-001").items
        assert len(remaining) == 1
        assert remaining[0].id != line_id

    def test_update_over_stock(self):
        item_id = _stock_item(quantity=3)
        cart = _add(item_id, 1)
        with pytest.raises(InsufficientStock):
            current_domain.process(
                UpdateCartQuantity(user_id="user-001", cart_item_id=cart.items[0].id, new_quantity=4),
                asynchronous=False,
            )

    def test_cannot_touch_another_users_line(self):
        item_id = _stock_item()
        cart = _add(item_id, 1, user_id="user-001")
        _add(item_id, 1, user_id="user-002")

        with pytest.raises(CartItemNotFound):
            current_domain.process(
                UpdateCartQuantity(user_id="user-002", cart_item_id=cart.items[0].id, new_quantity=2),
                asynchronous=False,
            )

    def test_no_active_cart(self):
        with pytest.raises(NoActiveCart):
            current_domain.process(
                UpdateCartQuantity(user_id="user-001", cart_item_id="line-1", new_quantity=2),
                asynchronous=False,
            )


class TestRemoveFromCart:
    def test_remove(self):
        item_id = _stock_item()
        cart = _add(item_id, 1)
        current_domain.process(
            RemoveFromCart(user_id="user-001", cart_item_id=cart.items[0].id),
            asynchronous=False,
        )
        assert len(current_cart("user-001").items) == 0

    def test_remove_unknown_line(self):
        _add(_stock_item(), 1)
        with pytest.raises(CartItemNotFound):
            current_domain.process(RemoveFromCart(user_id="user-001", cart_item_id="missing"), asynchronous=False)


class TestClearCart:
    def test_clear_keeps_active_cart(self):
        _add(_stock_item("Soup"), 1)
        _add(_stock_item("Tea"), 1)

        current_domain.process(ClearCart(user_id="user-001"), asynchronous=False)

        cart = current_cart("user-001")
        assert cart is not None
        assert len(cart.items) == 0
        assert current_domain.repository_for(Cart).get(cart.id).status == CartStatus.ACTIVE.value

    def test_clear_without_cart(self):
        with pytest.raises(NoActiveCart):
            current_domain.process(ClearCart(user_id="user-001"), asynchronous=False)
