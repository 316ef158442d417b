"""Repository exports."""

from .base import BaseRepository, StoredDocument
from .user import RoleChange, UserRepository

__all__ = [
    "BaseRepository",
    "RoleChange",
    "StoredDocument",
    "UserRepository",
]
