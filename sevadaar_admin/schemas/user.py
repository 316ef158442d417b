"""Pydantic schemas for user documents stored in Firestore."""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, enum.Enum):
    """Privileged roles written by the provisioning tools."""

    DEVELOPER_ADMIN = "developer_admin"
    SUPER_ADMIN = "super_admin"


def default_name(email: str) -> str:
    """Return the local part of ``email`` used as a display name."""

    return email.split("@")[0]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserRecord(BaseModel):
    """Fields shared by every user document in the ``users`` collection."""

    uid: str
    email: str
    name: str
    role: UserRole
    status: str = "active"
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    def to_document(self) -> dict[str, Any]:
        """Serialise the record using the application's field names."""

        return self.model_dump(by_alias=True)


class DeveloperAdminRecord(UserRecord):
    """User document for a developer admin backed by a Firebase Auth account."""

    role: UserRole = UserRole.DEVELOPER_ADMIN
    fcm_token: str = Field(default="", alias="fcmToken")
    org_id: str | None = Field(default=None, alias="orgId")
    ngo_id: str | None = Field(default=None, alias="ngoId")
    ngo_request_status: str = Field(default="none", alias="ngoRequestStatus")


class SuperAdminRecord(UserRecord):
    """User document for a super admin created ahead of their first sign-in."""

    role: UserRole = UserRole.SUPER_ADMIN
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    def to_document(self) -> dict[str, Any]:
        document = super().to_document()
        if document["updatedAt"] is None:
            document["updatedAt"] = document["createdAt"]
        return document
