# core_store/repositories/core_entities.py

from __future__ import annotations

from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ..db import models


class CoreEntitiesRepository:
    """
    Data-access layer around the CoreEntity model, including the
    lookup of entities by owner.
    """

    UPDATABLE_FIELDS = frozenset({"title", "content", "owner_id"})

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def _base_select(self) -> Select[Any]:
        return select(models.CoreEntity)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def list_entities(
        self,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[models.CoreEntity]:
        stmt = self._base_select().order_by(
            models.CoreEntity.updated_at.desc(),
            models.CoreEntity.created_at.desc(),
        )

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = self.session.execute(stmt)
        return list(result.scalars().all())

    def get_by_id(self, entity_id: UUID) -> Optional[models.CoreEntity]:
        return self.session.get(models.CoreEntity, entity_id)

    def list_by_owner(
        self,
        owner_id: UUID,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[models.CoreEntity]:
        """
        Every CoreEntity whose ``owner_id`` equals ``owner_id``, oldest first.

        ``limit=None`` returns the full set.
        """
        stmt = (
            self._base_select()
            .where(models.CoreEntity.owner_id == owner_id)
            .order_by(models.CoreEntity.created_at, models.CoreEntity.title)
        )

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = self.session.execute(stmt)
        return list(result.scalars().all())

    def count_by_owner(self, owner_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(models.CoreEntity)
            .where(models.CoreEntity.owner_id == owner_id)
        )
        return int(self.session.execute(stmt).scalar_one())

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(
        self,
        *,
        title: str,
        content: str,
        owner_id: UUID,
    ) -> models.CoreEntity:
        entity = models.CoreEntity(
            title=title,
            content=content,
            owner_id=owner_id,
        )

        self.session.add(entity)
        self.session.flush()

        return entity

    def update_fields(
        self,
        entity: models.CoreEntity,
        *,
        fields: dict[str, Any],
    ) -> models.CoreEntity:
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update CoreEntity field(s): {sorted(unknown)}")

        for key, value in fields.items():
            setattr(entity, key, value)

        self.session.add(entity)
        self.session.flush()

        return entity

    def delete(self, entity: models.CoreEntity) -> None:
        self.session.delete(entity)
        self.session.flush()


__all__ = ["CoreEntitiesRepository"]
