"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from pantry.domain import pantry
from pantry.exceptions import OrderNotFound
from pantry.order.order import Order


@pantry.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        """Fetch an order, raising ``OrderNotFound`` when it does not exist."""
        try:
            return self.get(order_id)
        except ObjectNotFoundError as exc:
            raise OrderNotFound(order_id) from exc

    def page(self, limit, offset, **filters):
        """Newest-first slice of orders matching ``filters``.

        Returns the Protean result set; ``total`` counts every match, not
        just the returned slice.
        """
        query = self._dao.query
        if filters:
            query = query.filter(**filters)
        return query.order_by("-submitted_at").offset(offset).limit(limit).all()
