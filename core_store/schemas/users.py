"""
core_store/schemas/users.py

Pydantic models for User records. ``role`` is an unrestricted string;
``UserRole`` only names the conventional values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from core_store.db.models import DEFAULT_ROLE

from .common import APIModel


class UserCreate(APIModel):
    """
    Payload for creating a user. Omitting ``role`` yields "Standard User".
    """

    email: str = Field(..., description="Unique email address (not format-checked)")
    name: str = Field(..., description="Display name")
    role: Optional[str] = Field(
        default=None,
        description='Role label; defaults to "Standard User".',
    )


class UserUpdate(APIModel):
    """
    Partial update payload. Only provided fields are patched.
    """

    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class UserRead(APIModel):
    id: UUID
    email: str
    name: str
    role: str = DEFAULT_ROLE
    created_at: datetime
    updated_at: datetime


__all__ = ["UserCreate", "UserUpdate", "UserRead"]
