"""Create (or promote) a Sevadaar developer admin account.

Usage::

    create-developer-admin --email dev@example.com --password secret1

Ensures a Firebase Auth account and a ``users`` document with role
``developer_admin`` exist for the email. A user document that already exists
is only promoted; its Auth password is left unchanged.
"""

from __future__ import annotations

import argparse
import logging
import sys

from sevadaar_admin.core.config import Settings
from sevadaar_admin.core.firebase import CredentialsError
from sevadaar_admin.scripts.common import Connector, configure_logging, connect, resolve_settings
from sevadaar_admin.services.provisioning import (
    ProvisionOutcome,
    ProvisionResult,
    provision_developer_admin,
)

logger = logging.getLogger(__name__)

USAGE = (
    "Usage:\n"
    "    create-developer-admin --email user@example.com --password yourpassword"
)


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a developer admin account")
    parser.add_argument("--email", nargs="?", help="Email address for the developer admin")
    parser.add_argument("--password", nargs="?", help="Password for the Firebase Auth account")
    parser.add_argument("--credentials", help="Path to the Firebase service account key")
    return parser.parse_args(argv)


def _report(result: ProvisionResult) -> None:
    if result.password_updated:
        print(f"    Auth user already exists, password updated (UID: {result.account_uid}).")
    if result.account_created:
        print(f"    Auth user created (UID: {result.account_uid}).")

    if result.outcome is ProvisionOutcome.ALREADY_EXISTS:
        print(f"User already exists as developer_admin (UID: {result.uid})")
        return

    if result.outcome is ProvisionOutcome.PROMOTED:
        print(f"Existing user promoted from {result.previous_role} to developer_admin (UID: {result.uid})")
        return

    print("\nDeveloper admin created successfully!\n")
    print(f"    Email : {result.email}")
    print(f"    Role  : {result.role}")
    print(f"    UID   : {result.uid}\n")
    print("    The user can now sign in with email/password in the app.")


def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    connector: Connector = connect,
) -> int:
    args = _resolve_cli_args(argv)

    email = (args.email or "").strip()
    password = (args.password or "").strip()
    if not email or not password:
        raise SystemExit(USAGE)

    active_settings = resolve_settings(args.credentials, settings)
    configure_logging(active_settings.log_level)

    try:
        collaborators = connector(active_settings)
    except CredentialsError as exc:
        print(str(exc), file=sys.stderr)
        print(f"    Place your Firebase Admin SDK key in: {active_settings.service_account_path}", file=sys.stderr)
        return 1

    print("Creating developer admin account...")
    print(f"    Email   : {email}")
    print(f"    Password: {'*' * len(password)}\n")

    try:
        result = provision_developer_admin(
            collaborators.users,
            collaborators.identity,
            email=email,
            password=password,
        )
    except Exception as exc:
        logger.debug("Developer admin provisioning failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _report(result)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
