# ABOUTME: SQLModel table backing the generic document store.
# ABOUTME: One row per (collection, key) holding a JSON record.

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class Document(SQLModel, table=True):
    """A JSON record stored under a key inside a named collection."""

    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "key", name="uq_documents_collection_key"),)

    # Autoincrement id keeps insertion order for list_all
    id: int | None = Field(default=None, primary_key=True)
    collection: str = Field(index=True)
    key: str
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    stored_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
