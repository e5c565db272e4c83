"""Repository for the Cart aggregate."""

from protean.exceptions import ObjectNotFoundError

from pantry.cart.cart import Cart, CartStatus
from pantry.domain import pantry
from pantry.exceptions import NoActiveCart


@pantry.repository(part_of=Cart)
class CartRepository:
    def find_active_for(self, user_id) -> Cart | None:
        """Return the user's active cart, or None when there is none."""
        return self._dao.query.filter(user_id=str(user_id), status=CartStatus.ACTIVE.value).all().first

    def get_active_for(self, user_id) -> Cart:
        """Return the user's active cart or raise ``NoActiveCart``."""
        cart = self.find_active_for(user_id)
        if cart is None:
            raise NoActiveCart(user_id)
        return cart

    def find(self, cart_id) -> Cart | None:
        try:
            return self.get(cart_id)
        except ObjectNotFoundError:
            return None
