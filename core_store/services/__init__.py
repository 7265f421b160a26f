from .core_entities_service import CoreEntitiesService
from .users_service import UsersService

__all__ = ["CoreEntitiesService", "UsersService"]
