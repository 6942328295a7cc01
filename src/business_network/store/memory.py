# ABOUTME: In-memory implementation of the DocumentStore port (no DB).
# ABOUTME: Used by tests and short-lived sessions; order preserved by insertion.

import copy
import threading
from typing import Any

from business_network.store.exceptions import DocumentAlreadyExists
from business_network.store.ports import Record


class InMemoryDocumentStore:
    """Stores records in nested dicts. Records are copied on the way in and out."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Record]] = {}
        self._lock = threading.Lock()

    def put(self, collection: str, key: str, record: Record, merge: bool = False) -> None:
        with self._lock:
            documents = self._collections.setdefault(collection, {})
            existing = documents.get(key)
            if merge and existing is not None:
                documents[key] = {**existing, **copy.deepcopy(record)}
            else:
                documents[key] = copy.deepcopy(record)

    def create(self, collection: str, key: str, record: Record) -> None:
        with self._lock:
            documents = self._collections.setdefault(collection, {})
            if key in documents:
                raise DocumentAlreadyExists(collection, key)
            documents[key] = copy.deepcopy(record)

    def get(self, collection: str, key: str) -> Record | None:
        with self._lock:
            record = self._collections.get(collection, {}).get(key)
            return copy.deepcopy(record) if record is not None else None

    def delete(self, collection: str, key: str) -> bool:
        with self._lock:
            return self._collections.get(collection, {}).pop(key, None) is not None

    def list_all(self, collection: str) -> list[Record]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._collections.get(collection, {}).values()]

    def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._collections.get(collection, {}).values()
                if field in record and record[field] == value
            ]
