# core_store/db/errors.py

from __future__ import annotations

import enum

from sqlalchemy.exc import IntegrityError


class IntegrityKind(str, enum.Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    OTHER = "other"


# Lowercased fragments of driver messages (SQLite, PostgreSQL, MySQL).
_UNIQUE_MARKERS = ("unique constraint", "duplicate key", "duplicate entry")
_FOREIGN_KEY_MARKERS = ("foreign key",)


def classify_integrity_error(exc: IntegrityError) -> IntegrityKind:
    """
    Tell a uniqueness violation from a foreign key violation by looking at
    the DBAPI error message.
    """
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if any(marker in message for marker in _UNIQUE_MARKERS):
        return IntegrityKind.UNIQUE
    if any(marker in message for marker in _FOREIGN_KEY_MARKERS):
        return IntegrityKind.FOREIGN_KEY
    return IntegrityKind.OTHER


__all__ = ["IntegrityKind", "classify_integrity_error"]
