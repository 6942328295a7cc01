# ABOUTME: Document store package: the DocumentStore port and in-memory adapter.
# ABOUTME: The SQLite adapter lives in business_network.database.

from business_network.store.exceptions import DocumentAlreadyExists
from business_network.store.memory import InMemoryDocumentStore
from business_network.store.ports import DocumentStore, Record

__all__ = ["DocumentAlreadyExists", "DocumentStore", "InMemoryDocumentStore", "Record"]
