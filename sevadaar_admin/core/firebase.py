"""Firebase Admin SDK bootstrap helpers."""

from __future__ import annotations

import logging

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore import Client as FirestoreClient

from sevadaar_admin.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class CredentialsError(RuntimeError):
    """Raised when the service-account credential file cannot be loaded."""


def load_credentials(settings: Settings) -> credentials.Certificate:
    """Read the service-account key referenced by ``settings``."""

    path = settings.service_account_path
    if not path.is_file():
        raise CredentialsError(f"Could not load service account key: {path} does not exist")

    try:
        return credentials.Certificate(str(path))
    except (ValueError, OSError) as exc:
        raise CredentialsError(f"Could not load service account key from {path}: {exc}") from exc


def get_firebase_app(settings: Settings | None = None) -> firebase_admin.App:
    """Return the named Firebase app, initialising it on first use."""

    config = settings or get_settings()
    try:
        return firebase_admin.get_app(config.firebase_app_name)
    except ValueError:
        pass

    certificate = load_credentials(config)
    app = firebase_admin.initialize_app(
        certificate,
        options=config.firebase_options or None,
        name=config.firebase_app_name,
    )
    logger.info(
        "Initialised Firebase app",
        extra={"app_name": config.firebase_app_name, "project_id": certificate.project_id},
    )
    return app


def get_firestore_client(app: firebase_admin.App) -> FirestoreClient:
    """Create a Firestore client bound to ``app``.

    The client needs a project id, taken from the key file or from
    ``firebase_project_id``; a key without one is reported as a credential
    problem.
    """

    try:
        return firestore.client(app=app)
    except ValueError as exc:
        raise CredentialsError(f"Could not create Firestore client: {exc}") from exc
