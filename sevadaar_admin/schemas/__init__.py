"""Schema exports."""

from .user import DeveloperAdminRecord, SuperAdminRecord, UserRecord, UserRole, default_name

__all__ = [
    "DeveloperAdminRecord",
    "SuperAdminRecord",
    "UserRecord",
    "UserRole",
    "default_name",
]
