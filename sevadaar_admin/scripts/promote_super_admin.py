"""Promote a Sevadaar user to super admin, or create one directly.

Usage::

    # Promote an existing user (the user must have signed up first)
    promote-super-admin --email user@example.com

    # Create the super admin document directly (no sign-up needed)
    promote-super-admin --email user@example.com --create

A document created with ``--create`` has no Firebase Auth account; the app
links it by email when the user first signs in.
"""

from __future__ import annotations

import argparse
import logging
import sys

from sevadaar_admin.core.config import Settings
from sevadaar_admin.core.firebase import CredentialsError
from sevadaar_admin.repositories.user import RoleChange
from sevadaar_admin.scripts.common import Connector, configure_logging, connect, resolve_settings
from sevadaar_admin.services.provisioning import (
    UserNotFoundError,
    create_super_admin,
    normalize_email,
    promote_super_admin,
)

logger = logging.getLogger(__name__)

USAGE = (
    "Usage:\n"
    "    promote-super-admin --email user@example.com\n"
    "    promote-super-admin --email user@example.com --create\n\n"
    "  --create flag: Creates the user directly without pre-signup"
)


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Promote or create a super admin")
    parser.add_argument("--email", nargs="?", help="Email of the user to promote")
    parser.add_argument(
        "--create",
        action="store_true",
        help="Create the super admin document if no user exists for the email",
    )
    parser.add_argument("--credentials", help="Path to the Firebase service account key")
    return parser.parse_args(argv)


def _report_promotion(change: RoleChange) -> None:
    if not change.changed:
        print(f'"{change.email}" is already a super_admin (UID: {change.uid}).')
        return

    print("Found user:")
    print(f"    Name  : {change.name}")
    print(f"    Email : {change.email}")
    print(f"    Role  : {change.previous_role} -> {change.role}")
    print(f"    UID   : {change.uid}\n")
    print(f'Successfully promoted "{change.name}" to Super Admin!\n')
    print("    Next steps:")
    print("    1. Email the user their login credentials.")
    print("    2. They can now log in and create NGOs from the app.")


def _report_creation(change: RoleChange) -> None:
    if not change.changed:
        print(f'"{change.email}" is already a super_admin (UID: {change.uid}).')
        return

    if not change.created:
        print("    (User already exists, updating role)\n")
        print(f"User role updated from {change.previous_role} to super_admin!")
        print(f"    UID: {change.uid}")
        return

    print("Super admin account created!\n")
    print(f"    Email : {change.email}")
    print(f"    Name  : {change.name}")
    print(f"    Role  : {change.role}")
    print(f"    UID   : {change.uid}\n")
    print("    Next steps:")
    print("    1. User can now sign in with any social provider (Google, etc.)")
    print("    2. Their account will automatically link to this super_admin profile")


def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    connector: Connector = connect,
) -> int:
    args = _resolve_cli_args(argv)

    email = normalize_email(args.email or "")
    if not email:
        raise SystemExit(USAGE)

    active_settings = resolve_settings(args.credentials, settings)
    configure_logging(active_settings.log_level)

    try:
        collaborators = connector(active_settings)
    except CredentialsError as exc:
        print(str(exc), file=sys.stderr)
        print(f"    Place your Firebase Admin SDK key in: {active_settings.service_account_path}", file=sys.stderr)
        print("    Download from: Firebase Console > Project Settings > Service accounts", file=sys.stderr)
        return 1

    try:
        if args.create:
            print(f"Creating direct super admin account for: {email}\n")
            change = create_super_admin(collaborators.users, email=email)
        else:
            print(f"Searching for user with email: {email} ...\n")
            change = promote_super_admin(collaborators.users, email=email)
    except UserNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except Exception as exc:
        logger.debug("Super admin provisioning failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.create:
        _report_creation(change)
    else:
        _report_promotion(change)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
