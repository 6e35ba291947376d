"""Factory Boy helpers wired to the application's SQLAlchemy session."""

from __future__ import annotations

import factory
from blogauth.core.extensions import db


def _session():
    """Return the scoped session of the current app context."""
    return db.session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Base class persisting factory objects through ``db.session``."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = _session
        # Services read through their own units of work; rows must be committed.
        sqlalchemy_session_persistence = "commit"
