"""Service layer for the provisioning workflows."""

from .identity import IdentityAccount, IdentityService
from .provisioning import (
    ProvisionOutcome,
    ProvisionResult,
    ProvisioningError,
    UserNotFoundError,
    create_super_admin,
    normalize_email,
    promote_super_admin,
    provision_developer_admin,
)

__all__ = [
    "IdentityAccount",
    "IdentityService",
    "ProvisionOutcome",
    "ProvisionResult",
    "ProvisioningError",
    "UserNotFoundError",
    "create_super_admin",
    "normalize_email",
    "promote_super_admin",
    "provision_developer_admin",
]
