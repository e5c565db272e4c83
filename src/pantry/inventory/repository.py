"""Repository for the Item aggregate."""

from protean.exceptions import ObjectNotFoundError

from pantry.domain import pantry
from pantry.exceptions import ItemNotFound
from pantry.inventory.item import Item


@pantry.repository(part_of=Item)
class ItemRepository:
    def get_item(self, item_id) -> Item:
        """Fetch an item, raising ``ItemNotFound`` when it does not exist."""
        try:
            return self.get(item_id)
        except ObjectNotFoundError as exc:
            raise ItemNotFound(item_id) from exc
