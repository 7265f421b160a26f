# core_store/repositories/users.py

from __future__ import annotations

from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ..db import models


class UsersRepository:
    """
    Thin data-access layer around the User model.

    Write methods flush but never commit; the service layer owns the
    transaction.
    """

    UPDATABLE_FIELDS = frozenset({"email", "name", "role"})

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    def _base_select(self) -> Select[Any]:
        return select(models.User)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def list_users(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[models.User]:
        """
        Return a page of users, newest first.
        """
        stmt = self._base_select().order_by(
            models.User.created_at.desc(),
            models.User.email,
        )

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = self.session.execute(stmt)
        return list(result.scalars().all())

    def get_by_id(self, user_id: UUID) -> Optional[models.User]:
        """
        Fetch a single user by primary key, or None if it does not exist.
        """
        return self.session.get(models.User, user_id)

    def get_by_email(self, email: str) -> Optional[models.User]:
        stmt = self._base_select().where(models.User.email == email)
        result = self.session.execute(stmt)
        return result.scalar_one_or_none()

    def exists(self, user_id: UUID) -> bool:
        stmt = select(models.User.id).where(models.User.id == user_id)
        return self.session.execute(stmt).first() is not None

    def count(self) -> int:
        stmt = select(func.count()).select_from(models.User)
        return int(self.session.execute(stmt).scalar_one())

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(
        self,
        *,
        email: str,
        name: str,
        role: Optional[str] = None,
    ) -> models.User:
        """
        Create and flush a new User. ``role`` falls back to the column default.
        """
        user = models.User(
            email=email,
            name=name,
            role=role if role is not None else models.DEFAULT_ROLE,
        )

        self.session.add(user)
        self.session.flush()

        return user

    def update_fields(
        self,
        user: models.User,
        *,
        fields: dict[str, Any],
    ) -> models.User:
        """
        Apply the given field updates and flush.

        Keys outside ``UPDATABLE_FIELDS`` raise ``ValueError``.
        """
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update User field(s): {sorted(unknown)}")

        for key, value in fields.items():
            setattr(user, key, value)

        self.session.add(user)
        self.session.flush()

        return user

    def delete(self, user: models.User) -> None:
        self.session.delete(user)
        self.session.flush()


__all__ = ["UsersRepository"]
