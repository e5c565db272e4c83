"""Cart management — opening the user's active cart and clearing it."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from pantry.cart.cart import Cart
from pantry.domain import pantry


@pantry.command(part_of="Cart")
class OpenCart:
    """Get the user's active cart, creating one at ``pantry_id`` if none exists."""

    user_id = Identifier(required=True)
    pantry_id = Identifier(required=True)


@pantry.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def get_or_create_active_cart(repo, user_id, pantry_id):
    """Return the user's active cart, adding a fresh one to ``repo`` if needed."""
    cart = repo.find_active_for(user_id)
    if cart is None:
        cart = Cart.create(user_id=user_id, pantry_id=pantry_id)
        repo.add(cart)
    return cart


@pantry.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        repo = current_domain.repository_for(Cart)
        return get_or_create_active_cart(repo, command.user_id, command.pantry_id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_active_for(command.user_id)
        cart.clear()
        repo.add(cart)
        return cart
