# core_store/exceptions.py

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for all domain-level exceptions."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# --- Not Found Errors ---

class RecordNotFoundError(DomainError):
    """Raised when a record lookup misses."""


class UserNotFoundError(RecordNotFoundError):
    """Raised when no User matches the given id or email."""

    def __init__(self, key: Any, *, field: str = "id"):
        self.key = key
        self.field = field
        super().__init__(f"User with {field}='{key}' not found.")


class CoreEntityNotFoundError(RecordNotFoundError):
    """Raised when no CoreEntity matches the given id."""

    def __init__(self, entity_id: Any):
        self.entity_id = entity_id
        super().__init__(f"CoreEntity with id='{entity_id}' not found.")


# --- Constraint Errors ---

class UniquenessViolationError(DomainError):
    """Raised when an insert or update would duplicate a unique column."""

    def __init__(self, field: str, value: Any, *, entity: str = "User"):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity} with {field}='{value}' already exists.")


class ReferentialIntegrityError(DomainError):
    """Raised when a CoreEntity references a User that does not exist."""

    def __init__(self, owner_id: Any, message: str | None = None):
        self.owner_id = owner_id
        super().__init__(message or f"Owner User '{owner_id}' does not exist.")


class OwnerHasEntitiesError(ReferentialIntegrityError):
    """Raised when deleting a User that still owns CoreEntity records."""

    def __init__(self, user_id: Any, count: int):
        self.count = count
        super().__init__(
            user_id,
            f"User '{user_id}' still owns {count} CoreEntity record(s) and cannot be deleted.",
        )


class ImmutableFieldError(DomainError):
    """Raised when a flush tries to change a write-once column."""

    def __init__(self, entity: str, field: str):
        self.entity = entity
        self.field = field
        super().__init__(f"{entity}.{field} cannot be modified after insert.")


__all__ = [
    "DomainError",
    "RecordNotFoundError",
    "UserNotFoundError",
    "CoreEntityNotFoundError",
    "UniquenessViolationError",
    "ReferentialIntegrityError",
    "OwnerHasEntitiesError",
    "ImmutableFieldError",
]
