from .base import BaseRepository, IRepository, BaseService, IService
from .exceptions import (
    BaseError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    PersistenceError,
)
from .config import Settings, get_settings

__all__ = [
    # Base classes
    "BaseRepository",
    "IRepository",
    "BaseService",
    "IService",

    # Exceptions
    "BaseError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "PersistenceError",

    # Config
    "Settings",
    "get_settings"
]
