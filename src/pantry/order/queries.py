"""Read-side operations for orders: single fetch and paginated listings.

Ownership is enforced here, the same way the command handlers enforce it:
admins see every order, users only their own.
"""

from dataclasses import dataclass, field

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from pantry.order.access import ensure_permitted, role_for
from pantry.order.order import Order, OrderStatus

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class OrderPage:
    """One page of orders plus the numbers needed to page through the rest."""

    orders: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    pages: int = 0


def normalize_paging(page, page_size):
    """Clamp paging input: page < 1 becomes 1, an out-of-range size becomes the default."""
    page = page if page and page >= 1 else 1
    if not page_size or page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size


def _status_filter(status):
    if status is None or status == "":
        return {}
    try:
        return {"status": OrderStatus(status.value if isinstance(status, OrderStatus) else status).value}
    except ValueError as exc:
        raise ValidationError({"status": [f"Unknown order status: {status}"]}) from exc


def _fetch_page(page, page_size, **filters) -> OrderPage:
    page, page_size = normalize_paging(page, page_size)
    result = current_domain.repository_for(Order).page(limit=page_size, offset=(page - 1) * page_size, **filters)

    total = result.total
    pages = total // page_size
    if total % page_size:
        pages += 1

    return OrderPage(orders=list(result.items), total=total, page=page, page_size=page_size, pages=pages)


def get_order(order_id, requester_id, is_admin=False) -> Order:
    order = current_domain.repository_for(Order).get_order(order_id)
    ensure_permitted(role_for(is_admin), requester_id, order.user_id, action="view this order")
    return order


def list_orders(requester_id, is_admin=False, status=None, page=1, page_size=DEFAULT_PAGE_SIZE) -> OrderPage:
    filters = _status_filter(status)
    if not is_admin:
        filters["user_id"] = str(requester_id)
    return _fetch_page(page, page_size, **filters)


def list_pantry_orders(pantry_id, status=None, page=1, page_size=DEFAULT_PAGE_SIZE) -> OrderPage:
    return _fetch_page(page, page_size, pantry_id=str(pantry_id), **_status_filter(status))
