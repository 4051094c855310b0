"""
Module: opsdesk_kernel.selectors.base
Responsibility: Shared plumbing for the read side of the store.  A selector
    is bound to one record model and a caller-owned Session, and turns rows
    into frozen DTOs.
Architecture position: Kernel > Selectors.  May import from db/ and
    models/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only: no add/delete/flush/commit on the session.
    - Results leave as DTOs, never as ORM instances.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from opsdesk_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
InfoType = TypeVar("InfoType")


class BaseSelector(ABC, Generic[ModelType, InfoType]):
    """
    Read-only queries over one record model.

    Subclasses set ``model`` and implement ``to_info``; ``get`` and
    ``_rows`` then work for any record table.
    """

    model: type[ModelType]

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def to_info(self, row: ModelType) -> InfoType:
        """Convert an ORM row to its DTO."""

    def get(self, record_id: int) -> InfoType | None:
        """Return the record's DTO, or None if no row has that id."""
        row = self.session.get(self.model, record_id)
        return self.to_info(row) if row is not None else None

    def _select(self) -> Select:
        return select(self.model)

    def _rows(self, stmt: Select) -> list[InfoType]:
        return [self.to_info(row) for row in self.session.execute(stmt).scalars()]
