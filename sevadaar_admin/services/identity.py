"""Firebase Authentication helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import firebase_admin
from firebase_admin import auth

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IdentityAccount:
    """Minimal view of a Firebase Auth user."""

    uid: str
    email: str | None
    display_name: str | None = None

    @classmethod
    def from_user_record(cls, record: auth.UserRecord) -> "IdentityAccount":
        return cls(uid=record.uid, email=record.email, display_name=record.display_name)


class IdentityService:
    """Wraps the ``firebase_admin.auth`` calls used by the provisioning tools."""

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        self._app = app

    def get_by_email(self, email: str) -> IdentityAccount | None:
        """Return the account registered for ``email``, or ``None`` when absent.

        Errors other than "user not found" propagate to the caller.
        """

        try:
            record = auth.get_user_by_email(email, app=self._app)
        except auth.UserNotFoundError:
            return None
        return IdentityAccount.from_user_record(record)

    def create_account(self, email: str, password: str, display_name: str) -> IdentityAccount:
        record = auth.create_user(
            email=email,
            password=password,
            display_name=display_name,
            app=self._app,
        )
        logger.info("Created Firebase Auth user", extra={"uid": record.uid})
        return IdentityAccount.from_user_record(record)

    def update_password(self, uid: str, password: str) -> None:
        auth.update_user(uid, password=password, app=self._app)
        logger.info("Updated Firebase Auth password", extra={"uid": uid})
