# core_store/repositories/__init__.py
"""
Repository layer public exports.

    from core_store.repositories import UsersRepository, CoreEntitiesRepository
"""

from .core_entities import CoreEntitiesRepository
from .users import UsersRepository

__all__ = [
    "CoreEntitiesRepository",
    "UsersRepository",
]
