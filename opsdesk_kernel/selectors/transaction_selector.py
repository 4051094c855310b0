"""
Module: opsdesk_kernel.selectors.transaction_selector
Responsibility: Read-only transaction queries: the newest-first listing,
    single lookups, the dashboard summary and the per-customer chart rollup.
Architecture position: Kernel > Selectors.  May import from models/ and
    selectors/base.py.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - All money results are Decimal rounded to cents (never float).
    - Sums are computed by the database over the NUMERIC column and
      re-quantized, so no cents are lost across many rows.
    - Empty tables yield zero totals, not None.

Failure modes:
    - Returns empty lists or zero totals when no transactions exist.
"""

from decimal import Decimal

from sqlalchemy import func, select

from opsdesk_kernel.db.types import round_money
from opsdesk_kernel.domain.dtos import (
    CustomerLoanTotal,
    TransactionInfo,
    TransactionSummary,
)
from opsdesk_kernel.models.transaction import Transaction
from opsdesk_kernel.selectors.base import BaseSelector


class TransactionSelector(BaseSelector[Transaction, TransactionInfo]):
    """
    Selector for transaction listings and reporting.

    Guarantees:
        - list_newest_first() orders by created_at DESC, then id DESC so rows
          created in the same instant keep a stable order.
        - chart_by_customer() has one row per distinct customer_name, ordered
          by customer_name ASC, with no id or timestamps.
    """

    model = Transaction

    def to_info(self, row: Transaction) -> TransactionInfo:
        return TransactionInfo(
            id=row.id,
            customer_name=row.customer_name,
            loan_amount=row.loan_amount,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def list_newest_first(self) -> list[TransactionInfo]:
        """All transactions, most recently created first."""
        return self._rows(
            self._select().order_by(
                Transaction.created_at.desc(),
                Transaction.id.desc(),
            )
        )

    def summary(self) -> TransactionSummary:
        """
        Totals over all transactions.

        Returns:
            TransactionSummary with the distinct customer count, the row
            count, and the summed loan amount (Decimal("0.00") when empty).
        """
        stmt = select(
            func.count(func.distinct(Transaction.customer_name)),
            func.count(Transaction.id),
            func.sum(Transaction.loan_amount),
        )
        total_customers, total_transactions, total_amount = (
            self.session.execute(stmt).one()
        )
        return TransactionSummary(
            total_customers=total_customers or 0,
            total_transactions=total_transactions or 0,
            total_loan_amount=round_money(total_amount or Decimal("0")),
        )

    def chart_by_customer(self) -> list[CustomerLoanTotal]:
        """Summed loan amount per customer, ordered by customer name."""
        total = func.sum(Transaction.loan_amount).label("total_loan_amount")
        stmt = (
            select(Transaction.customer_name, total)
            .group_by(Transaction.customer_name)
            .order_by(Transaction.customer_name)
        )
        return [
            CustomerLoanTotal(
                customer_name=customer_name,
                loan_amount=round_money(amount),
            )
            for customer_name, amount in self.session.execute(stmt)
        ]
