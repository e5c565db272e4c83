"""Cart line management — commands and handler.

Every handler resolves the acting user's active cart first, so a user can
only ever touch lines of their own cart.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from pantry.cart.cart import Cart
from pantry.cart.management import get_or_create_active_cart
from pantry.domain import pantry
from pantry.inventory.item import Item


@pantry.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    pantry_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@pantry.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)
    new_quantity = Integer(required=True, min_value=0)


@pantry.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    cart_item_id = Identifier(required=True)


@pantry.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        # Item checks come before the cart is touched
        item = current_domain.repository_for(Item).get_item(command.item_id)
        item.ensure_can_supply(command.quantity)

        repo = current_domain.repository_for(Cart)
        cart = get_or_create_active_cart(repo, command.user_id, command.pantry_id)
        cart.add_item(item, command.quantity)
        repo.add(cart)
        return cart

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_active_for(command.user_id)
        line = cart.line(command.cart_item_id)

        item = None
        if command.new_quantity > 0:
            item = current_domain.repository_for(Item).get_item(line.item_id)

        cart.update_item_quantity(command.cart_item_id, command.new_quantity, item=item)
        repo.add(cart)
        return cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_active_for(command.user_id)
        cart.remove_item(command.cart_item_id)
        repo.add(cart)
        return cart
