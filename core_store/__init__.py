"""
core_store
==========

Relational data model for ``User`` and ``CoreEntity`` records plus the
SQLAlchemy persistence layer they plug into.

Typical usage:

    from core_store.db import db_session
    from core_store.services import UsersService
    from core_store.schemas import UserCreate

    with db_session() as session:
        users = UsersService.from_session(session)
        user = users.create_user(UserCreate(email="ada@example.org", name="Ada"))
"""

__version__ = "0.1.0"
