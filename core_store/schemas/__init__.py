from .common import APIModel
from .core_entities import CoreEntityCreate, CoreEntityRead, CoreEntityUpdate
from .users import UserCreate, UserRead, UserUpdate

__all__ = [
    "APIModel",
    "CoreEntityCreate",
    "CoreEntityRead",
    "CoreEntityUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
