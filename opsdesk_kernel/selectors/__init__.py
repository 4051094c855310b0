"""Selectors for the OpsDesk kernel (read side)."""

from opsdesk_kernel.selectors.inventory_selector import InventorySelector
from opsdesk_kernel.selectors.transaction_selector import TransactionSelector

__all__ = [
    "InventorySelector",
    "TransactionSelector",
]
