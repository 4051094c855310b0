"""
DTOs -- immutable records returned by services and selectors.

Responsibility:
    Pure data carriers between the kernel and its callers.  Services and
    selectors never hand out ORM instances, so a caller can not mutate a
    row by accident or trigger lazy loads after the session closed.

Architecture position:
    Kernel > Domain -- zero I/O, no ORM imports.

Invariants:
    - Money fields are Decimal with two fractional digits, never float.
    - Timestamps are timezone-aware UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class TransactionInfo:
    """A stored loan transaction."""

    id: int
    customer_name: str
    loan_amount: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class InventoryItemInfo:
    """A stored inventory item."""

    id: int
    item_name: str
    quantity: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TransactionSummary:
    """Dashboard totals over all transactions."""

    total_customers: int
    total_transactions: int
    total_loan_amount: Decimal


@dataclass(frozen=True)
class InventorySummary:
    """Dashboard totals over all inventory items."""

    total_item_types: int
    total_stock_quantity: int


@dataclass(frozen=True)
class CustomerLoanTotal:
    """One bar of the transaction chart: a customer's summed loans."""

    customer_name: str
    loan_amount: Decimal


@dataclass(frozen=True)
class ItemStockLevel:
    """One bar of the inventory chart."""

    item_name: str
    quantity: int
