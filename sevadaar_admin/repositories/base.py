"""Shared repository helpers used by concrete Firestore collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from google.cloud.firestore import Client as FirestoreClient
from google.cloud.firestore_v1.base_query import FieldFilter
from google.cloud.firestore_v1.collection import CollectionReference
from google.cloud.firestore_v1.query import Query


@dataclass(slots=True)
class StoredDocument:
    """Snapshot of a document read from a collection."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> "StoredDocument":
        return cls(id=snapshot.id, data=snapshot.to_dict() or {})


class BaseRepository:
    """Small abstraction around a single Firestore collection."""

    def __init__(self, client: FirestoreClient, collection_name: str):
        self._client = client
        self._collection_name = collection_name

    @property
    def collection_name(self) -> str:
        """Return the Firestore collection handled by the repository."""

        return self._collection_name

    @property
    def collection(self) -> CollectionReference:
        return self._client.collection(self._collection_name)

    def query_by_field(self, field_path: str, value: Any) -> Query:
        """Build an equality query limited to a single result."""

        return self.collection.where(filter=FieldFilter(field_path, "==", value)).limit(1)

    def find_one_by_field(self, field_path: str, value: Any) -> StoredDocument | None:
        """Return the first document whose ``field_path`` equals ``value``."""

        for snapshot in self.query_by_field(field_path, value).stream():
            return StoredDocument.from_snapshot(snapshot)
        return None

    def update_fields(self, document_id: str, fields: dict[str, Any]) -> None:
        """Merge ``fields`` into an existing document."""

        self.collection.document(document_id).update(fields)
