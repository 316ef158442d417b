"""Repository utilities for user documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from google.cloud.firestore import Client as FirestoreClient
from google.cloud.firestore_v1 import transactional
from google.cloud.firestore_v1.transaction import Transaction

from sevadaar_admin.repositories.base import BaseRepository, StoredDocument
from sevadaar_admin.schemas.user import UserRecord, UserRole

logger = logging.getLogger(__name__)

RecordBuilder = Callable[[str], UserRecord]


@dataclass(slots=True)
class RoleChange:
    """Outcome of a role assignment against a single user document."""

    uid: str
    email: str
    name: str | None
    previous_role: str | None
    role: str
    created: bool = False

    @property
    def changed(self) -> bool:
        return self.created or self.previous_role != self.role


class UserRepository(BaseRepository):
    """Data-access helper for the application's user documents.

    Email is not a key in Firestore, so the find-then-write operations below
    run inside a transaction: the email query is read through the transaction
    and a concurrent write for the same email forces a retry instead of a
    duplicate document.
    """

    def __init__(self, client: FirestoreClient, collection_name: str = "users") -> None:
        super().__init__(client, collection_name)

    def get_by_email(self, email: str) -> StoredDocument | None:
        """Return the user document matching ``email`` if it exists."""

        return self.find_one_by_field("email", email)

    def update_role(self, uid: str, role: UserRole) -> None:
        """Overwrite only the ``role`` field of an existing document."""

        self.update_fields(uid, {"role": UserRole(role).value})
        logger.info("Updated user role", extra={"uid": uid, "role": UserRole(role).value})

    def set_role_by_email(self, email: str, role: UserRole) -> RoleChange | None:
        """Assign ``role`` to the document matching ``email``.

        Returns ``None`` without writing when no document matches.
        """

        query = self.query_by_field("email", email)
        role_value = UserRole(role).value

        @transactional
        def _apply(transaction: Transaction) -> RoleChange | None:
            snapshots = list(transaction.get(query))
            if not snapshots:
                return None
            return self._assign_role(transaction, StoredDocument.from_snapshot(snapshots[0]), role_value)

        return _apply(self._client.transaction())

    def upsert_by_email(
        self,
        email: str,
        *,
        role: UserRole,
        build: RecordBuilder,
        document_id: str | None = None,
    ) -> RoleChange:
        """Assign ``role`` to the document matching ``email`` or create one.

        ``build`` receives the id of the new document and returns the record to
        store. When ``document_id`` is omitted Firestore generates the id.
        """

        query = self.query_by_field("email", email)
        role_value = UserRole(role).value

        @transactional
        def _apply(transaction: Transaction) -> RoleChange:
            snapshots = list(transaction.get(query))
            if snapshots:
                return self._assign_role(transaction, StoredDocument.from_snapshot(snapshots[0]), role_value)

            reference = self.collection.document(document_id) if document_id else self.collection.document()
            record = build(reference.id)
            if document_id:
                # The id belongs to a Firebase Auth account; a stale document under it is replaced.
                transaction.set(reference, record.to_document())
            else:
                transaction.create(reference, record.to_document())
            return RoleChange(
                uid=reference.id,
                email=record.email,
                name=record.name,
                previous_role=None,
                role=role_value,
                created=True,
            )

        change = _apply(self._client.transaction())
        if change.created:
            logger.info("Created user document", extra={"uid": change.uid, "role": change.role})
        return change

    def _assign_role(self, transaction: Transaction, document: StoredDocument, role: str) -> RoleChange:
        previous_role = document.data.get("role")
        if previous_role != role:
            transaction.update(self.collection.document(document.id), {"role": role})
        return RoleChange(
            uid=document.id,
            email=document.data.get("email", ""),
            name=document.data.get("name"),
            previous_role=previous_role,
            role=role,
        )
