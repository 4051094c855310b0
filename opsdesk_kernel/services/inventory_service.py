"""
Service layer for InventoryItem writes.

Returns InventoryItemInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from sqlalchemy import delete

from opsdesk_kernel.domain.dtos import InventoryItemInfo
from opsdesk_kernel.domain.fields import UNSET, is_set
from opsdesk_kernel.exceptions import InventoryItemNotFoundError
from opsdesk_kernel.logging_config import get_logger
from opsdesk_kernel.models.inventory_item import InventoryItem
from opsdesk_kernel.services.base import BaseService

logger = get_logger("services.inventory")


class InventoryService(BaseService[InventoryItem]):
    """Service for managing inventory items."""

    def _to_dto(self, item: InventoryItem) -> InventoryItemInfo:
        """Convert ORM InventoryItem to InventoryItemInfo DTO."""
        return InventoryItemInfo(
            id=item.id,
            item_name=item.item_name,
            quantity=item.quantity,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    def _get_by_id(self, item_id: int) -> InventoryItem:
        """Get inventory item by ID, raising if not found."""
        item = self.session.get(InventoryItem, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)
        return item

    def create_item(self, item_name: str, quantity: int) -> InventoryItemInfo:
        """
        Create a new inventory item.

        Args:
            item_name: Display name of the item.
            quantity: Units on hand (>= 0).

        Returns:
            Created InventoryItemInfo DTO.
        """
        now = self._now()
        item = InventoryItem(
            item_name=item_name,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )
        self.session.add(item)
        self.session.flush()

        logger.info(
            "inventory_item_created",
            extra={"item_id": item.id, "quantity": quantity},
        )
        return self._to_dto(item)

    def update_item(
        self,
        item_id: int,
        item_name: str = UNSET,
        quantity: int = UNSET,
    ) -> InventoryItemInfo:
        """
        Update inventory item fields that were supplied.

        ``quantity=0`` is a real value and is applied; only UNSET leaves a
        field alone.

        Raises:
            InventoryItemNotFoundError: If the item doesn't exist.
        """
        item = self._get_by_id(item_id)

        changed: list[str] = []
        if is_set(item_name):
            item.item_name = item_name
            changed.append("item_name")
        if is_set(quantity):
            item.quantity = quantity
            changed.append("quantity")

        item.updated_at = self._next_updated_at(item.updated_at)
        self.session.flush()

        logger.info(
            "inventory_item_updated",
            extra={"item_id": item_id, "fields": changed},
        )
        return self._to_dto(item)

    def delete_item(self, item_id: int) -> bool:
        """
        Hard-delete an inventory item.

        Returns:
            True if a row was removed, False if the id does not exist.
        """
        result = self.session.execute(
            delete(InventoryItem).where(InventoryItem.id == item_id)
        )
        removed = result.rowcount > 0

        logger.info(
            "inventory_item_deleted",
            extra={"item_id": item_id, "removed": removed},
        )
        return removed
