"""
Module: opsdesk_kernel.selectors.inventory_selector
Responsibility: Read-only inventory queries: listing, lookups, the
    dashboard summary and the per-item chart data.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Items with quantity 0 still count toward total_item_types.
    - Empty tables yield zero totals, not None.
"""

from sqlalchemy import func, select

from opsdesk_kernel.domain.dtos import (
    InventoryItemInfo,
    InventorySummary,
    ItemStockLevel,
)
from opsdesk_kernel.models.inventory_item import InventoryItem
from opsdesk_kernel.selectors.base import BaseSelector


class InventorySelector(BaseSelector[InventoryItem, InventoryItemInfo]):
    """Selector for inventory listings and reporting (store order = id ASC)."""

    model = InventoryItem

    def to_info(self, row: InventoryItem) -> InventoryItemInfo:
        return InventoryItemInfo(
            id=row.id,
            item_name=row.item_name,
            quantity=row.quantity,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def list_items(self) -> list[InventoryItemInfo]:
        """All inventory items in store order."""
        return self._rows(self._select().order_by(InventoryItem.id))

    def summary(self) -> InventorySummary:
        """Row count and total units on hand."""
        stmt = select(
            func.count(InventoryItem.id),
            func.coalesce(func.sum(InventoryItem.quantity), 0),
        )
        total_item_types, total_stock = self.session.execute(stmt).one()
        return InventorySummary(
            total_item_types=int(total_item_types),
            total_stock_quantity=int(total_stock),
        )

    def chart_levels(self) -> list[ItemStockLevel]:
        """One (item_name, quantity) pair per item, in store order."""
        stmt = select(InventoryItem.item_name, InventoryItem.quantity).order_by(
            InventoryItem.id
        )
        return [
            ItemStockLevel(item_name=name, quantity=quantity)
            for name, quantity in self.session.execute(stmt)
        ]
