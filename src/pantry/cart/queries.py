"""Read-side helpers for carts."""

from protean.utils.globals import current_domain

from pantry.cart.cart import Cart


def current_cart(user_id) -> Cart | None:
    """The user's active cart, without creating one."""
    return current_domain.repository_for(Cart).find_active_for(user_id)
