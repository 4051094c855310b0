"""Services for the OpsDesk kernel (write side)."""

from opsdesk_kernel.services.inventory_service import InventoryService
from opsdesk_kernel.services.transaction_service import TransactionService

__all__ = [
    "InventoryService",
    "TransactionService",
]
