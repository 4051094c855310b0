"""
Module: opsdesk_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.
    Provides the integer primary key convention, the type annotation map for
    consistent column types, and the TrackedBase mixin for record timestamps.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel.  ALL model files import from here.  This module MUST NOT
    import from models/, services/, selectors/, or outer layers.

Invariants enforced:
    - Integer primary keys: every model gets a store-assigned autoincrement
      id.  Ids start at 1 (0 never appears) and are never reused after a
      delete (sequences on PostgreSQL; models set
      ``sqlite_autoincrement`` so SQLite does not recycle max(rowid)).
    - Decimal precision: type_annotation_map maps Python Decimal to
      FixedPointMoney (NUMERIC(10, 2), rounded half-up on write).
      NEVER use float for monetary amounts.
    - Timestamps: TrackedBase provides created_at and updated_at, always
      timezone-aware UTC.  Services assign both from an injected Clock.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from opsdesk_kernel.db.types import FixedPointMoney, UTCDateTime


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Contract:
        Every ORM model in the system inherits from Base (or TrackedBase).
        Base provides an integer primary key and a type_annotation_map that
        enforces consistent column types across the schema.

    Guarantees:
        - id is a store-assigned integer, never reused.
        - Decimal maps to NUMERIC(10, 2) with half-up rounding.
        - datetime maps to a timezone-aware UTC column.
        - str maps to TEXT.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: FixedPointMoney(),
        datetime: UTCDateTime(),
        str: Text(),
        int: Integer(),
    }

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )


class TrackedBase(Base):
    """
    Abstract base with record timestamps.

    Contract:
        created_at is written once on insert.  updated_at equals created_at
        on insert and is reset by the owning service on every update.

    Guarantees:
        - Both columns are NOT NULL.
        - updated_at >= created_at (enforced by the services, which take
          both values from the same Clock and never move updated_at
          backwards).
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )
