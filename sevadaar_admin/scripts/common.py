"""Helpers shared by the provisioning command-line scripts."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from sevadaar_admin.core.config import Settings, get_settings
from sevadaar_admin.core.firebase import get_firebase_app, get_firestore_client
from sevadaar_admin.repositories.user import UserRepository
from sevadaar_admin.services.identity import IdentityService

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass(slots=True)
class Collaborators:
    """External services a provisioning run talks to."""

    users: UserRepository
    identity: IdentityService


Connector = Callable[[Settings], Collaborators]


def connect(settings: Settings) -> Collaborators:
    """Initialise Firebase from ``settings`` and build the collaborators."""

    app = get_firebase_app(settings)
    client = get_firestore_client(app)
    return Collaborators(
        users=UserRepository(client, settings.users_collection),
        identity=IdentityService(app),
    )


def resolve_settings(credentials: str | None, settings: Settings | None = None) -> Settings:
    active_settings = settings or get_settings()
    if credentials:
        return active_settings.model_copy(update={"service_account_path": Path(credentials)})
    return active_settings


def configure_logging(level: str) -> None:
    package_logger = logging.getLogger("sevadaar_admin")
    package_logger.setLevel(level.upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
