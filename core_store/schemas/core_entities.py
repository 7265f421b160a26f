"""
core_store/schemas/core_entities.py

Pydantic models for CoreEntity records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import APIModel


class CoreEntityCreate(APIModel):
    title: str = Field(..., description="Short title")
    content: str = Field(..., description="Long-form text body")
    owner_id: UUID = Field(..., description="Id of the owning User")


class CoreEntityUpdate(APIModel):
    """
    Partial update payload. Changing ``owner_id`` transfers ownership and
    requires the new owner to exist.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    owner_id: Optional[UUID] = None


class CoreEntityRead(APIModel):
    id: UUID
    title: str
    content: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime


__all__ = ["CoreEntityCreate", "CoreEntityUpdate", "CoreEntityRead"]
