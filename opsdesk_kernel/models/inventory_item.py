"""
Module: opsdesk_kernel.models.inventory_item
Responsibility: ORM persistence for inventory stock items.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - quantity is a non-negative integer (CHECK constraint backs the
      validation layer).
    - id is never reused.
"""

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk_kernel.db.base import TrackedBase


class InventoryItem(TrackedBase):
    """A stocked item and how many units are on hand."""

    __tablename__ = "inventory_items"

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_item_quantity"),
        {"sqlite_autoincrement": True},
    )

    item_name: Mapped[str] = mapped_column(nullable=False)

    quantity: Mapped[int] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return f"<InventoryItem {self.id}: {self.item_name} x{self.quantity}>"
