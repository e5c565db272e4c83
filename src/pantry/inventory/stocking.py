"""Item stocking — commands and handler.

The thin collaborator surface the pantry core relies on: putting items on
the shelf, topping them up, toggling availability, and discontinuing them.
"""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from pantry.domain import pantry
from pantry.inventory.item import DEFAULT_LOW_STOCK_THRESHOLD, Item

logger = structlog.get_logger(__name__)


@pantry.command(part_of="Item")
class StockItem:
    name = String(required=True, max_length=255)
    pantry_id = Identifier(required=True)
    quantity = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(default=DEFAULT_LOW_STOCK_THRESHOLD, min_value=0)
    unit = String(max_length=20, default="count")
    is_available = Boolean(default=True)


@pantry.command(part_of="Item")
class RestockItem:
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    reference = String(max_length=255)


@pantry.command(part_of="Item")
class SetItemAvailability:
    item_id = Identifier(required=True)
    is_available = Boolean(required=True)


@pantry.command(part_of="Item")
class DiscontinueItem:
    """Remove an item from the pantry altogether."""

    item_id = Identifier(required=True)


@pantry.command_handler(part_of=Item)
class StockingHandler:
    @handle(StockItem)
    def stock_item(self, command):
        item = Item.stock(
            name=command.name,
            pantry_id=command.pantry_id,
            quantity=command.quantity,
            low_stock_threshold=command.low_stock_threshold,
            unit=command.unit,
            is_available=command.is_available,
        )
        current_domain.repository_for(Item).add(item)
        return str(item.id)

    @handle(RestockItem)
    def restock_item(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get_item(command.item_id)
        item.restock(command.quantity, reference=command.reference)
        repo.add(item)

    @handle(SetItemAvailability)
    def set_item_availability(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get_item(command.item_id)
        item.set_availability(command.is_available)
        repo.add(item)

    @handle(DiscontinueItem)
    def discontinue_item(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get_item(command.item_id)
        repo._dao.delete(item)
        logger.info("Item discontinued", item_id=str(item.id), pantry_id=str(item.pantry_id))
