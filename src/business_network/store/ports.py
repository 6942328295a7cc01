# ABOUTME: Document store port implemented by the SQLite and in-memory adapters.
# ABOUTME: Records are JSON-compatible dicts addressed by (collection, key).

from typing import Any, Protocol

Record = dict[str, Any]


class DocumentStore(Protocol):
    """Minimal document store used by the identity and network services."""

    def put(self, collection: str, key: str, record: Record, merge: bool = False) -> None:
        """Write a record. With merge=True, update fields of an existing record."""
        ...

    def create(self, collection: str, key: str, record: Record) -> None:
        """Insert a record atomically. Raises DocumentAlreadyExists if the key exists."""
        ...

    def get(self, collection: str, key: str) -> Record | None:
        """Return the record stored under key, or None."""
        ...

    def delete(self, collection: str, key: str) -> bool:
        """Delete the record under key. Returns True if one was deleted."""
        ...

    def list_all(self, collection: str) -> list[Record]:
        """Return every record of the collection in insertion order."""
        ...

    def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        """Return records whose top-level field equals value, in insertion order."""
        ...
