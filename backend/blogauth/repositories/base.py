"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only:

* They never implement use cases or token policies.
* They never call commit/rollback; the Unit of Work owns transactions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy.orm import Session

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``: the SQLAlchemy mapped class.
    """

    model: type[E]

    def __init__(self, *, session: Session) -> None:
        """
        :param session: Session shared with the enclosing Unit of Work.
        """
        self.session = session

    def get(self, entity_id: Any) -> E | None:
        """Return the entity with primary key ``entity_id`` or ``None``."""
        return cast(E | None, self.session.get(self.model, entity_id))

    def add(self, entity: E) -> E:
        """Stage ``entity`` for insertion and flush to obtain its id."""
        self.session.add(entity)
        self.flush()
        return entity

    def flush(self) -> None:
        self.session.flush()
