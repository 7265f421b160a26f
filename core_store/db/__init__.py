"""
core_store.db
=============

Database package for core_store.

Centralizes the public DB primitives so the rest of the code can import
them from a single place, e.g.:

    from core_store.db import Base, SessionLocal, db_session, init_db
"""

from .models import Base, CoreEntity, User, UserRole
from .session import (
    SessionLocal,
    build_engine,
    build_session_factory,
    db_session,
    engine,
    get_db,
    init_db,
)

__all__ = [
    "Base",
    "CoreEntity",
    "User",
    "UserRole",
    "SessionLocal",
    "build_engine",
    "build_session_factory",
    "db_session",
    "engine",
    "get_db",
    "init_db",
]
