"""
Service layer for Transaction writes.

Creates, partially updates and hard-deletes loan transactions.

Returns TransactionInfo DTOs instead of ORM entities.  Money stays Decimal;
the column type rounds it half-up to cents on every write.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import delete

from opsdesk_kernel.domain.dtos import TransactionInfo
from opsdesk_kernel.domain.fields import UNSET, is_set
from opsdesk_kernel.exceptions import TransactionNotFoundError
from opsdesk_kernel.logging_config import get_logger
from opsdesk_kernel.models.transaction import Transaction
from opsdesk_kernel.services.base import BaseService

logger = get_logger("services.transaction")


class TransactionService(BaseService[Transaction]):
    """
    Service for managing loan transactions.

    All public methods return TransactionInfo DTOs, not ORM Transaction
    entities.  Inputs are expected to be validated already (see
    opsdesk_services.schemas); the service only enforces existence.
    """

    def _to_dto(self, transaction: Transaction) -> TransactionInfo:
        """Convert ORM Transaction to TransactionInfo DTO."""
        return TransactionInfo(
            id=transaction.id,
            customer_name=transaction.customer_name,
            loan_amount=transaction.loan_amount,
            created_at=transaction.created_at,
            updated_at=transaction.updated_at,
        )

    def _get_by_id(self, transaction_id: int) -> Transaction:
        """Get transaction by ID, raising if not found."""
        transaction = self.session.get(Transaction, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        return transaction

    def create_transaction(
        self,
        customer_name: str,
        loan_amount: Decimal,
    ) -> TransactionInfo:
        """
        Create a new transaction.

        Args:
            customer_name: Customer the loan was issued to.
            loan_amount: Positive amount; rounded half-up to cents on write.

        Returns:
            Created TransactionInfo with store-assigned id and
            created_at == updated_at.
        """
        now = self._now()
        transaction = Transaction(
            customer_name=customer_name,
            loan_amount=loan_amount,
            created_at=now,
            updated_at=now,
        )
        self.session.add(transaction)
        self.session.flush()
        # Re-read so the DTO carries the rounded column value
        self.session.refresh(transaction, attribute_names=["loan_amount"])

        logger.info(
            "transaction_created",
            extra={
                "transaction_id": transaction.id,
                "loan_amount": transaction.loan_amount,
            },
        )
        return self._to_dto(transaction)

    def update_transaction(
        self,
        transaction_id: int,
        customer_name: str = UNSET,
        loan_amount: Decimal = UNSET,
    ) -> TransactionInfo:
        """
        Update transaction fields that were supplied.

        Fields left as UNSET keep their stored value.  updated_at moves
        forward on every call, even when no field is supplied.

        Args:
            transaction_id: Id of the transaction to update.
            customer_name: New customer name (if supplied).
            loan_amount: New loan amount (if supplied).

        Returns:
            Updated TransactionInfo DTO.

        Raises:
            TransactionNotFoundError: If the transaction doesn't exist.
        """
        transaction = self._get_by_id(transaction_id)

        changed: list[str] = []
        if is_set(customer_name):
            transaction.customer_name = customer_name
            changed.append("customer_name")
        if is_set(loan_amount):
            transaction.loan_amount = loan_amount
            changed.append("loan_amount")

        transaction.updated_at = self._next_updated_at(transaction.updated_at)

        self.session.flush()
        if "loan_amount" in changed:
            self.session.refresh(transaction, attribute_names=["loan_amount"])

        logger.info(
            "transaction_updated",
            extra={"transaction_id": transaction_id, "fields": changed},
        )
        return self._to_dto(transaction)

    def delete_transaction(self, transaction_id: int) -> bool:
        """
        Hard-delete a transaction.

        Args:
            transaction_id: Id of the transaction to delete.

        Returns:
            True if a row was removed, False if no such transaction exists.
            A missing id is not an error.
        """
        result = self.session.execute(
            delete(Transaction).where(Transaction.id == transaction_id)
        )
        removed = result.rowcount > 0

        logger.info(
            "transaction_deleted",
            extra={"transaction_id": transaction_id, "removed": removed},
        )
        return removed
