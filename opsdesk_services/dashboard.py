"""
DashboardService -- the operations the dashboard calls.

Responsibility:
    One method per dashboard operation (create/list/update/delete for both
    record types, the two summaries, the two chart feeds, healthcheck).
    Each method validates its payload, runs exactly one unit of work inside
    ``session_scope()``, and converts the kernel DTOs into boundary payloads.

Architecture position:
    Services -- above ``opsdesk_kernel`` and below the transports
    (``opsdesk_services.http_api``, ``scripts/opsdesk.py``).

Boundary format:
    Payloads are plain dicts with camelCase keys.  Money leaves the system as
    ``float`` (never a string); inside the kernel it is Decimal.  Timestamps
    are timezone-aware ``datetime`` objects.

Error handling:
    - InvalidInputError is raised before any session is opened.
    - RecordNotFoundError subclasses propagate verbatim.
    - SQLAlchemy errors are logged as ``store_failure`` and re-raised
      unmodified.  There is no retry.
    - Deleting a missing id is not an error: ``{"success": False}``.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from opsdesk_kernel.db.engine import session_scope
from opsdesk_kernel.domain.clock import Clock, SystemClock
from opsdesk_kernel.domain.dtos import (
    CustomerLoanTotal,
    InventoryItemInfo,
    InventorySummary,
    ItemStockLevel,
    TransactionInfo,
    TransactionSummary,
)
from opsdesk_kernel.exceptions import InvalidInputError
from opsdesk_kernel.logging_config import LogContext, get_logger
from opsdesk_kernel.selectors.inventory_selector import InventorySelector
from opsdesk_kernel.selectors.transaction_selector import TransactionSelector
from opsdesk_kernel.services.inventory_service import InventoryService
from opsdesk_kernel.services.transaction_service import TransactionService
from opsdesk_services.schemas import (
    parse_create_inventory_item,
    parse_create_transaction,
    parse_delete,
    parse_update_inventory_item,
    parse_update_transaction,
)

logger = get_logger("services.dashboard")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Boundary conversion
# ---------------------------------------------------------------------------


def transaction_payload(info: TransactionInfo) -> dict[str, Any]:
    return {
        "id": info.id,
        "customerName": info.customer_name,
        "loanAmount": float(info.loan_amount),
        "createdAt": info.created_at,
        "updatedAt": info.updated_at,
    }


def inventory_item_payload(info: InventoryItemInfo) -> dict[str, Any]:
    return {
        "id": info.id,
        "itemName": info.item_name,
        "quantity": info.quantity,
        "createdAt": info.created_at,
        "updatedAt": info.updated_at,
    }


def transaction_summary_payload(summary: TransactionSummary) -> dict[str, Any]:
    return {
        "totalCustomers": summary.total_customers,
        "totalTransactions": summary.total_transactions,
        "totalLoanAmount": float(summary.total_loan_amount),
    }


def inventory_summary_payload(summary: InventorySummary) -> dict[str, Any]:
    return {
        "totalItemTypes": summary.total_item_types,
        "totalStockQuantity": summary.total_stock_quantity,
    }


def customer_total_payload(row: CustomerLoanTotal) -> dict[str, Any]:
    return {"customerName": row.customer_name, "loanAmount": float(row.loan_amount)}


def stock_level_payload(row: ItemStockLevel) -> dict[str, Any]:
    return {"itemName": row.item_name, "quantity": row.quantity}


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class DashboardService:
    """
    Store-backed implementation of every dashboard operation.

    Contract:
        Stateless apart from the session factory and clock; safe to share
        between requests.  Each call is its own database transaction.

    Args:
        session_factory: Factory for sessions (module factory if None).
        clock: Time source for record timestamps (SystemClock if None).
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        clock: Clock | None = None,
    ):
        self._session_factory = session_factory
        self._clock = clock or SystemClock()

    # -- plumbing -----------------------------------------------------------

    def _validate(self, operation: str, parser: Callable[[Any], T], payload: Any) -> T:
        try:
            return parser(payload)
        except InvalidInputError as exc:
            logger.info(
                "input_rejected",
                extra={"operation": operation, "field": exc.field, "reason": exc.reason},
            )
            raise

    @contextmanager
    def _unit_of_work(self, operation: str) -> Generator[Session, None, None]:
        with LogContext.bind(operation=operation):
            try:
                with session_scope(self._session_factory) as session:
                    yield session
            except SQLAlchemyError:
                logger.error("store_failure", exc_info=True)
                raise
            logger.debug("operation_completed")

    # -- transactions -------------------------------------------------------

    def create_transaction(self, payload: Any) -> dict[str, Any]:
        data = self._validate("createTransaction", parse_create_transaction, payload)
        with self._unit_of_work("createTransaction") as session:
            info = TransactionService(session, self._clock).create_transaction(
                customer_name=data.customer_name,
                loan_amount=data.loan_amount,
            )
        return transaction_payload(info)

    def get_transactions(self) -> list[dict[str, Any]]:
        """All transactions, newest ``createdAt`` first."""
        with self._unit_of_work("getTransactions") as session:
            rows = TransactionSelector(session).list_newest_first()
        return [transaction_payload(r) for r in rows]

    def update_transaction(self, payload: Any) -> dict[str, Any]:
        """
        Apply a partial update.

        Raises:
            InvalidInputError: malformed payload.
            TransactionNotFoundError: no transaction with that id.
        """
        data = self._validate("updateTransaction", parse_update_transaction, payload)
        with self._unit_of_work("updateTransaction") as session:
            info = TransactionService(session, self._clock).update_transaction(
                data.id,
                customer_name=data.customer_name,
                loan_amount=data.loan_amount,
            )
        return transaction_payload(info)

    def delete_transaction(self, payload: Any) -> dict[str, bool]:
        data = self._validate("deleteTransaction", parse_delete, payload)
        with self._unit_of_work("deleteTransaction") as session:
            removed = TransactionService(session, self._clock).delete_transaction(data.id)
        return {"success": removed}

    # -- inventory ----------------------------------------------------------

    def create_inventory_item(self, payload: Any) -> dict[str, Any]:
        data = self._validate("createInventoryItem", parse_create_inventory_item, payload)
        with self._unit_of_work("createInventoryItem") as session:
            info = InventoryService(session, self._clock).create_item(
                item_name=data.item_name,
                quantity=data.quantity,
            )
        return inventory_item_payload(info)

    def get_inventory_items(self) -> list[dict[str, Any]]:
        with self._unit_of_work("getInventoryItems") as session:
            rows = InventorySelector(session).list_items()
        return [inventory_item_payload(r) for r in rows]

    def update_inventory_item(self, payload: Any) -> dict[str, Any]:
        """
        Apply a partial update; ``quantity: 0`` is a real value.

        Raises:
            InvalidInputError: malformed payload.
            InventoryItemNotFoundError: no item with that id.
        """
        data = self._validate("updateInventoryItem", parse_update_inventory_item, payload)
        with self._unit_of_work("updateInventoryItem") as session:
            info = InventoryService(session, self._clock).update_item(
                data.id,
                item_name=data.item_name,
                quantity=data.quantity,
            )
        return inventory_item_payload(info)

    def delete_inventory_item(self, payload: Any) -> dict[str, bool]:
        data = self._validate("deleteInventoryItem", parse_delete, payload)
        with self._unit_of_work("deleteInventoryItem") as session:
            removed = InventoryService(session, self._clock).delete_item(data.id)
        return {"success": removed}

    # -- reporting ----------------------------------------------------------

    def get_transaction_summary(self) -> dict[str, Any]:
        with self._unit_of_work("getTransactionSummary") as session:
            summary = TransactionSelector(session).summary()
        return transaction_summary_payload(summary)

    def get_inventory_summary(self) -> dict[str, Any]:
        with self._unit_of_work("getInventorySummary") as session:
            summary = InventorySelector(session).summary()
        return inventory_summary_payload(summary)

    def get_transaction_chart_data(self) -> list[dict[str, Any]]:
        """Per-customer loan totals, sorted by customer name."""
        with self._unit_of_work("getTransactionChartData") as session:
            rows = TransactionSelector(session).chart_by_customer()
        return [customer_total_payload(r) for r in rows]

    def get_inventory_chart_data(self) -> list[dict[str, Any]]:
        with self._unit_of_work("getInventoryChartData") as session:
            rows = InventorySelector(session).chart_levels()
        return [stock_level_payload(r) for r in rows]

    def healthcheck(self) -> dict[str, str]:
        """Liveness probe; does not touch the database."""
        return {"status": "ok", "timestamp": self._clock.now_utc().isoformat()}
