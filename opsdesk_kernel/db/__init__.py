"""Database layer - engine, base classes, column types."""

from opsdesk_kernel.db.base import Base, TrackedBase
from opsdesk_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from opsdesk_kernel.db.types import FixedPointMoney, UTCDateTime, round_money

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "get_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "reset_engine",
    "Base",
    "TrackedBase",
    "FixedPointMoney",
    "UTCDateTime",
    "round_money",
]
