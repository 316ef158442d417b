"""Provisioning workflows for developer admins and super admins."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sevadaar_admin.repositories.user import RoleChange, UserRepository
from sevadaar_admin.schemas.user import DeveloperAdminRecord, SuperAdminRecord, UserRole, default_name
from sevadaar_admin.services.identity import IdentityService

logger = logging.getLogger(__name__)


class ProvisioningError(Exception):
    """Raised when a provisioning workflow cannot be completed."""


class UserNotFoundError(ProvisioningError):
    """Raised when promoting an email that has no user document."""

    def __init__(self, email: str) -> None:
        super().__init__(
            f'No user found with email "{email}". Make sure the user has signed up in the app first.'
        )
        self.email = email


class ProvisionOutcome(str, enum.Enum):
    """What the developer-admin provisioner did for a given email."""

    ALREADY_EXISTS = "already_exists"
    PROMOTED = "promoted"
    CREATED = "created"


@dataclass(slots=True)
class ProvisionResult:
    """Summary of a developer-admin provisioning run."""

    outcome: ProvisionOutcome
    uid: str
    email: str
    role: str
    previous_role: str | None = None
    account_uid: str | None = None
    account_created: bool = False
    password_updated: bool = False


def normalize_email(email: str) -> str:
    return email.strip().lower()


def provision_developer_admin(
    users: UserRepository,
    identity: IdentityService,
    *,
    email: str,
    password: str,
) -> ProvisionResult:
    """Ensure ``email`` has a Firebase Auth account and a developer_admin document.

    An existing document only has its role changed; the password is not
    applied in that case and the Auth account is left untouched.
    """

    email = email.strip()
    if not email or not password:
        raise ProvisioningError("Email and password must be provided")

    role = UserRole.DEVELOPER_ADMIN.value
    existing = users.get_by_email(email)
    if existing is not None:
        previous_role = existing.data.get("role")
        if previous_role == role:
            logger.info("User is already a developer admin", extra={"uid": existing.id})
            return ProvisionResult(
                outcome=ProvisionOutcome.ALREADY_EXISTS,
                uid=existing.id,
                email=email,
                role=role,
                previous_role=previous_role,
            )
        users.update_role(existing.id, UserRole.DEVELOPER_ADMIN)
        return ProvisionResult(
            outcome=ProvisionOutcome.PROMOTED,
            uid=existing.id,
            email=email,
            role=role,
            previous_role=previous_role,
        )

    account_created = False
    password_updated = False
    account = identity.get_by_email(email)
    if account is not None:
        identity.update_password(account.uid, password)
        password_updated = True
    else:
        account = identity.create_account(email, password, display_name=default_name(email))
        account_created = True

    change = users.upsert_by_email(
        email,
        role=UserRole.DEVELOPER_ADMIN,
        build=lambda uid: DeveloperAdminRecord(uid=uid, email=email, name=default_name(email)),
        document_id=account.uid,
    )
    if change.created:
        outcome = ProvisionOutcome.CREATED
    elif change.changed:
        outcome = ProvisionOutcome.PROMOTED
    else:
        outcome = ProvisionOutcome.ALREADY_EXISTS

    if not change.created:
        # Another run wrote a document for this email between the lookup and the write.
        logger.warning(
            "User document appeared during provisioning",
            extra={"uid": change.uid, "account_uid": account.uid},
        )

    return ProvisionResult(
        outcome=outcome,
        uid=change.uid,
        email=email,
        role=role,
        previous_role=change.previous_role,
        account_uid=account.uid,
        account_created=account_created,
        password_updated=password_updated,
    )


def promote_super_admin(users: UserRepository, *, email: str) -> RoleChange:
    """Give an existing user document the super_admin role."""

    email = normalize_email(email)
    change = users.set_role_by_email(email, UserRole.SUPER_ADMIN)
    if change is None:
        raise UserNotFoundError(email)
    logger.info(
        "Promoted user to super admin",
        extra={"uid": change.uid, "previous_role": change.previous_role},
    )
    return change


def create_super_admin(users: UserRepository, *, email: str) -> RoleChange:
    """Promote the user document for ``email`` or create a new one.

    A created document gets a Firestore-generated id and no Firebase Auth
    account; the application links it to an account when the user signs in.
    """

    email = normalize_email(email)

    def _build(uid: str) -> SuperAdminRecord:
        now = datetime.now(UTC)
        return SuperAdminRecord(
            uid=uid,
            email=email,
            name=default_name(email),
            created_at=now,
            updated_at=now,
        )

    return users.upsert_by_email(email, role=UserRole.SUPER_ADMIN, build=_build)
