"""
BaseService -- abstract base for all kernel write services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every service in the kernel layer.  All concrete services inherit
    from BaseService, receiving a SQLAlchemy ``Session`` and a ``Clock``.
    They persist with ``session.flush()`` -- never ``session.commit()``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    - Transaction boundaries: services flush within the caller's
      transaction and never commit or rollback themselves.  The caller
      (DashboardService.session_scope or a test harness) owns commit/rollback.
    - Timestamps: created_at/updated_at come from the injected Clock, and
      updated_at strictly increases on every update.
"""

from abc import ABC
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from opsdesk_kernel.db.base import Base
from opsdesk_kernel.db.types import ensure_utc
from opsdesk_kernel.domain.clock import Clock, SystemClock

ModelType = TypeVar("ModelType", bound=Base)

# Smallest step both PostgreSQL and SQLite timestamps keep
_TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all kernel services.

    Contract:
        Accepts a SQLAlchemy ``Session`` from the caller and uses
        ``session.flush()`` to persist changes within the active
        transaction.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide listing or aggregation queries -- those belong
          in ``opsdesk_kernel/selectors/``.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        """
        Initialize the service.

        Args:
            session: SQLAlchemy session for database operations.
            clock: Time source for record timestamps (SystemClock if None).
        """
        self.session = session
        self._clock = clock or SystemClock()

    def _now(self) -> datetime:
        """Current time, normalized to UTC."""
        return ensure_utc(self._clock.now_utc())

    def _next_updated_at(self, previous: datetime) -> datetime:
        """
        Timestamp for an update that is strictly later than ``previous``.

        A clock that has not moved (or moved backwards) still yields a
        later value, so updated_at always reflects the most recent write.
        """
        now = self._now()
        if now <= previous:
            return previous + _TIMESTAMP_RESOLUTION
        return now
