# core_store/services/users_service.py

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core_store.db.errors import IntegrityKind, classify_integrity_error
from core_store.exceptions import (
    OwnerHasEntitiesError,
    UniquenessViolationError,
    UserNotFoundError,
)
from core_store.logging import get_logger
from core_store.repositories.core_entities import CoreEntitiesRepository
from core_store.repositories.users import UsersRepository
from core_store.schemas.users import UserCreate, UserRead, UserUpdate

logger = get_logger(__name__)


class UsersService:
    """
    High-level operations on User records.

    Responsibilities:
    - Enforce email uniqueness and the restrict-on-delete policy.
    - Own the transaction: commit on success, roll back before raising.
    - Convert ORM rows into ``UserRead`` schemas.
    """

    def __init__(
        self,
        repo: UsersRepository,
        entities_repo: Optional[CoreEntitiesRepository] = None,
    ) -> None:
        self._repo = repo
        self._entities = entities_repo or CoreEntitiesRepository(repo.session)

    @classmethod
    def from_session(cls, session: Session) -> "UsersService":
        return cls(UsersRepository(session), CoreEntitiesRepository(session))

    @property
    def session(self) -> Session:
        return self._repo.session

    # -------------------------------------------------------------------------
    # Core CRUD operations
    # -------------------------------------------------------------------------

    def create_user(self, payload: UserCreate) -> UserRead:
        """
        Create a new user. Raises ``UniquenessViolationError`` on a taken email.
        """
        if self._repo.get_by_email(payload.email) is not None:
            raise UniquenessViolationError("email", payload.email)

        try:
            user = self._repo.create(
                email=payload.email,
                name=payload.name,
                role=payload.role,
            )
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            self._raise_conflict(exc, payload.email)
            raise

        logger.info("user_created", user_id=str(user.id), role=user.role)
        return UserRead.model_validate(user)

    def get_user(self, user_id: UUID) -> UserRead:
        user = self._repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserRead.model_validate(user)

    def get_user_by_email(self, email: str) -> UserRead:
        user = self._repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError(email, field="email")
        return UserRead.model_validate(user)

    def list_users(self, *, limit: int = 50, offset: int = 0) -> List[UserRead]:
        users = self._repo.list_users(limit=limit, offset=offset)
        return [UserRead.model_validate(u) for u in users]

    def update_user(self, user_id: UUID, payload: UserUpdate) -> UserRead:
        """
        Patch the provided fields of an existing user.
        """
        user = self._repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        updates = payload.model_dump(exclude_unset=True, exclude_none=True)

        new_email = updates.get("email")
        if new_email is not None and new_email != user.email:
            existing = self._repo.get_by_email(new_email)
            if existing is not None and existing.id != user.id:
                raise UniquenessViolationError("email", new_email)

        if updates:
            try:
                self._repo.update_fields(user, fields=updates)
                self.session.commit()
            except IntegrityError as exc:
                self.session.rollback()
                self._raise_conflict(exc, new_email)
                raise
            logger.info(
                "user_updated", user_id=str(user.id), fields=sorted(updates)
            )

        return UserRead.model_validate(user)

    def delete_user(self, user_id: UUID) -> bool:
        """
        Delete a user. Returns False if no such user exists.

        Users that still own CoreEntity records are not deleted;
        ``OwnerHasEntitiesError`` is raised instead.
        """
        user = self._repo.get_by_id(user_id)
        if user is None:
            return False

        owned = self._entities.count_by_owner(user_id)
        if owned:
            raise OwnerHasEntitiesError(user_id, owned)

        try:
            self._repo.delete(user)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if classify_integrity_error(exc) is IntegrityKind.FOREIGN_KEY:
                raise OwnerHasEntitiesError(
                    user_id, self._entities.count_by_owner(user_id)
                ) from exc
            raise

        logger.info("user_deleted", user_id=str(user_id))
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _raise_conflict(exc: IntegrityError, email: Optional[str]) -> None:
        """Re-raise a unique violation as ``UniquenessViolationError``."""
        if classify_integrity_error(exc) is IntegrityKind.UNIQUE:
            logger.warning("user_email_conflict", email=email)
            raise UniquenessViolationError("email", email) from exc


__all__ = ["UsersService"]
