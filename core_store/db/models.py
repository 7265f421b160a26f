# core_store/db/models.py

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ForeignKey, String, Text, Uuid, event, inspect
from sqlalchemy.orm import (
    Mapped,
    declarative_base,
    declared_attr,
    mapped_column,
    object_session,
)

from core_store.db.types import UTCDateTime
from core_store.exceptions import ImmutableFieldError

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

Base = declarative_base()


def utcnow() -> datetime:
    """Clock used for record timestamps."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class UserRole(str, enum.Enum):
    """
    Intended values for ``User.role``.

    The column is a plain string: these are the conventional values, not
    an enforced set.
    """

    ADMIN = "Admin"
    STANDARD = "Standard User"


DEFAULT_ROLE = UserRole.STANDARD.value


# ---------------------------------------------------------------------------
# Mixins
# ---------------------------------------------------------------------------


class TimestampMixin:
    """
    ``createdAt`` / ``updatedAt`` columns maintained by mapper events.

    Both are written on insert from a single clock reading; ``updatedAt``
    is refreshed whenever a flush carries a net change to the row.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            "createdAt",
            UTCDateTime(timezone=True),
            nullable=False,
            info={"managed": "auto"},
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            "updatedAt",
            UTCDateTime(timezone=True),
            nullable=False,
            info={"managed": "auto"},
        )


# Attributes that may only be written by the INSERT.
WRITE_ONCE_ATTRIBUTES = ("id", "created_at")


@event.listens_for(TimestampMixin, "before_insert", propagate=True)
def _stamp_created(mapper, connection, target: Any) -> None:
    now = utcnow()
    target.created_at = now
    target.updated_at = now


@event.listens_for(TimestampMixin, "before_update", propagate=True)
def _stamp_updated(mapper, connection, target: Any) -> None:
    state = inspect(target)
    for key in WRITE_ONCE_ATTRIBUTES:
        if state.attrs[key].history.has_changes():
            raise ImmutableFieldError(type(target).__name__, key)

    # before_update also fires for dirty objects without net changes
    session = object_session(target)
    if session is not None and not session.is_modified(
        target, include_collections=False
    ):
        return

    now = utcnow()
    if target.created_at is not None and now < target.created_at:
        now = target.created_at
    target.updated_at = now


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(TimestampMixin, Base):
    """
    A registered user.

    ``email`` is unique across the whole table (exact string match).
    ``role`` defaults to "Standard User"; see ``UserRole`` for the
    conventional values.
    """

    __tablename__ = "user"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        info={"managed": "generated"},
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default=DEFAULT_ROLE,
        server_default=DEFAULT_ROLE,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User id={self.id!r} email={self.email!r} role={self.role!r}>"


# ---------------------------------------------------------------------------
# Core entities
# ---------------------------------------------------------------------------


class CoreEntity(TimestampMixin, Base):
    """
    A titled piece of long-form content owned by exactly one User.

    The owner is referenced only through ``owner_id``; there is no
    lazy-loading relationship attribute. Resolve the owner explicitly with
    ``CoreEntitiesService.get_owner`` or ``UsersRepository.get_by_id``.
    Owners cannot be deleted while they still own rows (ON DELETE RESTRICT).
    """

    __tablename__ = "core_entity"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        info={"managed": "generated"},
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        "ownerId",
        Uuid,
        ForeignKey("user.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<CoreEntity id={self.id!r} title={self.title!r} "
            f"owner_id={self.owner_id!r}>"
        )


__all__ = [
    "Base",
    "CoreEntity",
    "DEFAULT_ROLE",
    "TimestampMixin",
    "User",
    "UserRole",
    "WRITE_ONCE_ATTRIBUTES",
    "utcnow",
]
