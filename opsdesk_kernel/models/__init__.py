"""ORM models for the OpsDesk kernel."""

from opsdesk_kernel.models.inventory_item import InventoryItem
from opsdesk_kernel.models.transaction import Transaction

__all__ = [
    "InventoryItem",
    "Transaction",
]
