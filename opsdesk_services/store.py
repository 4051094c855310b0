"""
Store bootstrap shared by the transports.

``init_store`` is the one place that turns ``OpsDeskSettings`` into an
initialized engine with the record tables present.  The HTTP app and the
CLI both call it, so they honour the same pool settings.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from opsdesk_config import OpsDeskSettings
from opsdesk_kernel.db.engine import create_tables, init_engine_from_url


def init_store(settings: OpsDeskSettings) -> Engine:
    """
    Initialize the module engine from ``settings`` and create missing tables.

    Raises:
        sqlalchemy.exc.OperationalError: database unreachable.
    """
    engine = init_engine_from_url(
        settings.database_url,
        echo=settings.echo,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
    )
    create_tables()
    return engine
