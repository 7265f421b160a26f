# core_store/schemas/common.py

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Base model for every schema.

    - camelCase aliases (``createdAt``, ``ownerId``) match the stored
      column names; snake_case names are accepted as well.
    - ``from_attributes`` lets read models be built straight from ORM rows.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="forbid",
    )

    def to_wire(self) -> dict:
        """JSON-ready dict keyed by the camelCase aliases."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["APIModel"]
