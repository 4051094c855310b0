"""
Module: opsdesk_kernel.models.transaction
Responsibility: ORM persistence for customer loan transactions.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, or outer layers.

Invariants enforced:
    - loan_amount is NUMERIC(10, 2); the column type rounds half-up to cents
      on every write, so no stored amount has more than two fractional digits.
    - customer_name and loan_amount are NOT NULL.
    - id is never reused (sqlite_autoincrement / PostgreSQL sequence).

Failure modes:
    - IntegrityError if a row is flushed without customer_name, loan_amount
      or timestamps (the service always sets them).
    - DataError on PostgreSQL if loan_amount exceeds the column capacity
      (validation rejects amounts above 99,999,999.99 first).
"""

from decimal import Decimal

from sqlalchemy import Index
from sqlalchemy.orm import Mapped, mapped_column

from opsdesk_kernel.db.base import TrackedBase


class Transaction(TrackedBase):
    """
    A loan issued to a named customer.

    Contract:
        Created, updated and hard-deleted only through TransactionService.
        Unrelated to InventoryItem: no foreign keys either way.

    Guarantees:
        - loan_amount always reads back with exactly two decimal places.
        - created_at never changes after insert.
    """

    __tablename__ = "transactions"

    __table_args__ = (
        Index("idx_transaction_customer_name", "customer_name"),
        Index("idx_transaction_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    customer_name: Mapped[str] = mapped_column(nullable=False)

    loan_amount: Mapped[Decimal] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.id}: {self.customer_name} {self.loan_amount}>"
        )
