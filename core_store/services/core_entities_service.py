# core_store/services/core_entities_service.py

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core_store.db.errors import IntegrityKind, classify_integrity_error
from core_store.exceptions import (
    CoreEntityNotFoundError,
    ReferentialIntegrityError,
    UserNotFoundError,
)
from core_store.logging import get_logger
from core_store.repositories.core_entities import CoreEntitiesRepository
from core_store.repositories.users import UsersRepository
from core_store.schemas.core_entities import (
    CoreEntityCreate,
    CoreEntityRead,
    CoreEntityUpdate,
)
from core_store.schemas.users import UserRead

logger = get_logger(__name__)


class CoreEntitiesService:
    """
    High-level operations on CoreEntity records.

    Every write checks that the owner exists before touching the table;
    a foreign key failure that still reaches the database is reported as
    the same ``ReferentialIntegrityError``.
    """

    def __init__(
        self,
        repo: CoreEntitiesRepository,
        users_repo: Optional[UsersRepository] = None,
    ) -> None:
        self._repo = repo
        self._users = users_repo or UsersRepository(repo.session)

    @classmethod
    def from_session(cls, session: Session) -> "CoreEntitiesService":
        return cls(CoreEntitiesRepository(session), UsersRepository(session))

    @property
    def session(self) -> Session:
        return self._repo.session

    # -------------------------------------------------------------------------
    # Core CRUD operations
    # -------------------------------------------------------------------------

    def create_entity(self, payload: CoreEntityCreate) -> CoreEntityRead:
        if not self._users.exists(payload.owner_id):
            raise ReferentialIntegrityError(payload.owner_id)

        try:
            entity = self._repo.create(
                title=payload.title,
                content=payload.content,
                owner_id=payload.owner_id,
            )
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            self._raise_missing_owner(exc, payload.owner_id)
            raise

        logger.info(
            "core_entity_created",
            entity_id=str(entity.id),
            owner_id=str(entity.owner_id),
        )
        return CoreEntityRead.model_validate(entity)

    def get_entity(self, entity_id: UUID) -> CoreEntityRead:
        entity = self._repo.get_by_id(entity_id)
        if entity is None:
            raise CoreEntityNotFoundError(entity_id)
        return CoreEntityRead.model_validate(entity)

    def list_entities(
        self, *, limit: int = 50, offset: int = 0
    ) -> List[CoreEntityRead]:
        entities = self._repo.list_entities(limit=limit, offset=offset)
        return [CoreEntityRead.model_validate(e) for e in entities]

    def list_entities_for_owner(
        self,
        owner_id: UUID,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[CoreEntityRead]:
        """
        All entities owned by ``owner_id``. An unknown owner owns nothing.
        """
        entities = self._repo.list_by_owner(owner_id, limit=limit, offset=offset)
        return [CoreEntityRead.model_validate(e) for e in entities]

    def get_owner(self, entity_id: UUID) -> UserRead:
        """
        Resolve the owning User of an entity.
        """
        entity = self._repo.get_by_id(entity_id)
        if entity is None:
            raise CoreEntityNotFoundError(entity_id)

        owner = self._users.get_by_id(entity.owner_id)
        if owner is None:
            raise UserNotFoundError(entity.owner_id)
        return UserRead.model_validate(owner)

    def update_entity(self, entity_id: UUID, payload: CoreEntityUpdate) -> CoreEntityRead:
        entity = self._repo.get_by_id(entity_id)
        if entity is None:
            raise CoreEntityNotFoundError(entity_id)

        updates = payload.model_dump(exclude_unset=True, exclude_none=True)

        new_owner = updates.get("owner_id")
        if new_owner is not None and new_owner != entity.owner_id:
            if not self._users.exists(new_owner):
                raise ReferentialIntegrityError(new_owner)

        if updates:
            try:
                self._repo.update_fields(entity, fields=updates)
                self.session.commit()
            except IntegrityError as exc:
                self.session.rollback()
                self._raise_missing_owner(exc, new_owner)
                raise
            logger.info(
                "core_entity_updated",
                entity_id=str(entity.id),
                fields=sorted(updates),
            )

        return CoreEntityRead.model_validate(entity)

    def delete_entity(self, entity_id: UUID) -> bool:
        """
        Delete an entity by id. Returns False if it does not exist.
        """
        entity = self._repo.get_by_id(entity_id)
        if entity is None:
            return False

        self._repo.delete(entity)
        self.session.commit()

        logger.info("core_entity_deleted", entity_id=str(entity_id))
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _raise_missing_owner(exc: IntegrityError, owner_id: Optional[UUID]) -> None:
        """Re-raise a foreign key violation as ``ReferentialIntegrityError``."""
        if classify_integrity_error(exc) is IntegrityKind.FOREIGN_KEY:
            logger.warning("core_entity_owner_missing", owner_id=str(owner_id))
            raise ReferentialIntegrityError(owner_id) from exc


__all__ = ["CoreEntitiesService"]
