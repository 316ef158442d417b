"""Shared fixtures and in-memory collaborators for the provisioning tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sevadaar_admin.core.config import Settings
from sevadaar_admin.repositories.base import StoredDocument
from sevadaar_admin.repositories.user import RoleChange
from sevadaar_admin.schemas.user import UserRole
from sevadaar_admin.scripts.common import Collaborators
from sevadaar_admin.services.identity import IdentityAccount


class FakeUserRepository:
    """Dictionary-backed stand-in for ``UserRepository``."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self.documents: dict[str, dict[str, Any]] = {key: dict(value) for key, value in (documents or {}).items()}
        self.writes: list[tuple[str, str]] = []
        self.calls: list[str] = []
        self._generated = 0

    def get_by_email(self, email: str) -> StoredDocument | None:
        self.calls.append("get_by_email")
        for document_id, data in self.documents.items():
            if data.get("email") == email:
                return StoredDocument(id=document_id, data=dict(data))
        return None

    def update_role(self, uid: str, role: UserRole) -> None:
        self.documents[uid]["role"] = UserRole(role).value
        self.writes.append(("update", uid))

    def set_role_by_email(self, email: str, role: UserRole) -> RoleChange | None:
        document = self.get_by_email(email)
        if document is None:
            return None
        return self._assign(document, UserRole(role).value)

    def upsert_by_email(self, email, *, role, build, document_id=None) -> RoleChange:
        document = self.get_by_email(email)
        if document is not None:
            return self._assign(document, UserRole(role).value)

        if document_id is None:
            self._generated += 1
            document_id = f"generated-{self._generated}"
        record = build(document_id)
        self.documents[document_id] = record.to_document()
        self.writes.append(("create", document_id))
        return RoleChange(
            uid=document_id,
            email=record.email,
            name=record.name,
            previous_role=None,
            role=UserRole(role).value,
            created=True,
        )

    def _assign(self, document: StoredDocument, role: str) -> RoleChange:
        previous_role = document.data.get("role")
        if previous_role != role:
            self.update_role(document.id, role)
        return RoleChange(
            uid=document.id,
            email=document.data.get("email", ""),
            name=document.data.get("name"),
            previous_role=previous_role,
            role=role,
        )


class ConcurrentWriteUserRepository(FakeUserRepository):
    """Repository whose first email lookup misses a document written concurrently.

    The document only becomes visible to later reads, as when another run
    stores it between the initial lookup and the transactional write.
    """

    def __init__(self, documents: dict[str, dict[str, Any]]) -> None:
        super().__init__(documents)
        self._first_lookup = True

    def get_by_email(self, email: str) -> StoredDocument | None:
        if self._first_lookup:
            self._first_lookup = False
            self.calls.append("get_by_email")
            return None
        return super().get_by_email(email)


class FakeIdentityService:
    """Dictionary-backed stand-in for ``IdentityService``."""

    def __init__(self, accounts: dict[str, str] | None = None, error: Exception | None = None) -> None:
        self.accounts: dict[str, IdentityAccount] = {
            email: IdentityAccount(uid=uid, email=email) for email, uid in (accounts or {}).items()
        }
        self.passwords: dict[str, str] = {}
        self.calls: list[str] = []
        self.error = error

    def get_by_email(self, email: str) -> IdentityAccount | None:
        self.calls.append("get_by_email")
        if self.error is not None:
            raise self.error
        return self.accounts.get(email)

    def create_account(self, email: str, password: str, display_name: str) -> IdentityAccount:
        self.calls.append("create_account")
        account = IdentityAccount(uid=f"auth-{len(self.accounts) + 1}", email=email, display_name=display_name)
        self.accounts[email] = account
        self.passwords[account.uid] = password
        return account

    def update_password(self, uid: str, password: str) -> None:
        self.calls.append("update_password")
        self.passwords[uid] = password


class RecordingConnector:
    """Connector returning fixed collaborators while recording each call."""

    def __init__(self, users: FakeUserRepository, identity: FakeIdentityService, error: Exception | None = None) -> None:
        self.collaborators = Collaborators(users=users, identity=identity)
        self.error = error
        self.calls: list[Settings] = []

    def __call__(self, settings: Settings) -> Collaborators:
        self.calls.append(settings)
        if self.error is not None:
            raise self.error
        return self.collaborators


@pytest.fixture()
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture()
def identity() -> FakeIdentityService:
    return FakeIdentityService()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(service_account_path=tmp_path / "serviceAccountKey.json", log_level="WARNING")


@pytest.fixture()
def connector(users: FakeUserRepository, identity: FakeIdentityService) -> RecordingConnector:
    return RecordingConnector(users, identity)
