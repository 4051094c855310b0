"""
Module: opsdesk_kernel.db.types
Responsibility: Column types and helpers for fixed-point money and UTC
    timestamps.  Centralizes precision and rounding so that every model and
    service uses identical definitions.
Architecture position: Kernel > DB.  May be imported by models/, services/,
    and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    - Money columns are NUMERIC(10, 2).  Every value is quantized to two
      fractional digits with ROUND_HALF_UP before it is bound, and again when
      it is read, so ``1234.567`` is stored and always read back as
      ``Decimal("1234.57")``.
    - round_money() is the ONLY sanctioned rounding function for monetary
      values.
    - Timestamps are stored as UTC and always come back timezone-aware,
      on PostgreSQL and SQLite alike.
    CRITICAL: No floats inside the kernel.  Money is Decimal end to end;
      conversion to float happens only at the dashboard boundary.

Failure modes:
    - decimal.InvalidOperation when a non-numeric value reaches a money
      column (validation normally rejects it first).
    - ValueError when a naive datetime is bound to a UTC column.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import DateTime, Numeric
from sqlalchemy.types import TypeDecorator

# Column capacity: NUMERIC(10, 2) holds up to 99,999,999.99
MONEY_PRECISION = 10
MONEY_DECIMAL_PLACES = 2
MAX_MONEY = Decimal("99999999.99")
DEFAULT_ROUNDING = ROUND_HALF_UP

# Range of a 32-bit INTEGER column (quantities and record ids)
MIN_INTEGER = -2_147_483_648
MAX_INTEGER = 2_147_483_647
MAX_QUANTITY = MAX_INTEGER

_MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)


def round_money(value: Decimal, rounding: str = DEFAULT_ROUNDING) -> Decimal:
    """
    Round a monetary value to the column's two decimal places.

    This is the ONLY sanctioned rounding function for monetary values.

    Args:
        value: The Decimal value to round.
        rounding: Rounding mode (default: ROUND_HALF_UP).

    Returns:
        Decimal quantized to 0.01.
    """
    return value.quantize(_MONEY_QUANTUM, rounding=rounding)


def to_money(value: Decimal | int | float | str) -> Decimal:
    """
    Convert a numeric value to a rounded money Decimal.

    Floats go through ``str()`` so ``1234.567`` becomes ``Decimal("1234.567")``
    rather than its binary expansion.
    """
    if isinstance(value, float):
        value = str(value)
    return round_money(Decimal(value))


class FixedPointMoney(TypeDecorator):
    """
    NUMERIC(10, 2) money column that rounds on every write and read.

    Contract:
        Accepts Decimal, int, float or numeric str on bind; always returns
        Decimal with exactly two fractional digits on load.

    Guarantees:
        - process_bind_param: value -> round_money(Decimal(value)).
        - process_result_value: value -> round_money(Decimal(value)).  On
          SQLite (no native decimal) this also removes float noise from
          aggregated sums.
        - cache_ok=True enables SQLAlchemy statement caching.
    """

    impl = Numeric(MONEY_PRECISION, MONEY_DECIMAL_PLACES, asdecimal=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_money(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return to_money(value)


class UTCDateTime(TypeDecorator):
    """
    Timestamp column that is always timezone-aware UTC in Python.

    PostgreSQL keeps the offset natively (TIMESTAMP WITH TIME ZONE).  SQLite
    has no timezone support, so values are normalized to UTC and stored naive,
    and UTC is re-attached on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("UTCDateTime requires a timezone-aware datetime")
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to UTC (clock values may carry any offset)."""
    return value.astimezone(timezone.utc)
