# ABOUTME: Database service implementing the DocumentStore port on SQLite via SQLModel.
# ABOUTME: Provides session management and JSON document persistence per collection.

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session, SQLModel, create_engine, func, select

from business_network.errors import StoreUnavailableError
from business_network.models import Document
from business_network.store.exceptions import DocumentAlreadyExists
from business_network.store.ports import Record

logger = structlog.get_logger(__name__)


class DatabaseService:
    """Service for managing database connections and document operations."""

    DEFAULT_DB_PATH = Path.home() / ".business-network" / "data.db"

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the database service.

        Args:
            db_path: Path to the SQLite database file. Defaults to ~/.business-network/data.db
        """
        self.db_path = db_path if db_path is not None else self.DEFAULT_DB_PATH
        self._engine = create_engine(f"sqlite:///{self.db_path}", echo=False)

    def init_db(self) -> None:
        """Initialize the database by creating tables and parent directories."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        SQLModel.metadata.create_all(self._engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session as a context manager.

        Yields:
            SQLModel Session for database operations.

        Raises:
            StoreUnavailableError: If SQLite cannot be reached or is locked.
        """
        try:
            with Session(self._engine) as session:
                yield session
        except OperationalError as e:
            logger.warning("store_unavailable", db_path=str(self.db_path), error=str(e))
            raise StoreUnavailableError(f"Database unavailable: {e}") from e

    def _find(self, session: Session, collection: str, key: str) -> Document | None:
        statement = select(Document).where(
            Document.collection == collection,
            Document.key == key,
        )
        return session.exec(statement).first()

    def put(self, collection: str, key: str, record: Record, merge: bool = False) -> None:
        """Write a record, replacing it or merging into the existing one.

        Args:
            collection: Collection name.
            key: Document key within the collection.
            record: JSON-compatible record.
            merge: If True and the document exists, update only the given fields.
        """
        with self.get_session() as session:
            document = self._find(session, collection, key)
            if document is None:
                session.add(Document(collection=collection, key=key, data=dict(record)))
            elif merge:
                # Reassign so SQLAlchemy sees the JSON column as changed
                document.data = {**document.data, **record}
                session.add(document)
            else:
                document.data = dict(record)
                session.add(document)
            session.commit()

    def create(self, collection: str, key: str, record: Record) -> None:
        """Insert a record, failing if the key is already taken.

        The unique (collection, key) constraint makes this atomic.

        Raises:
            DocumentAlreadyExists: If a document with this key exists.
        """
        try:
            with self.get_session() as session:
                session.add(Document(collection=collection, key=key, data=dict(record)))
                session.commit()
        except IntegrityError as e:
            raise DocumentAlreadyExists(collection, key) from e

    def get(self, collection: str, key: str) -> Record | None:
        """Return the record under key, or None if absent."""
        with self.get_session() as session:
            document = self._find(session, collection, key)
            return dict(document.data) if document is not None else None

    def delete(self, collection: str, key: str) -> bool:
        """Delete the record under key.

        Returns:
            True if a document was deleted, False if none existed.
        """
        with self.get_session() as session:
            document = self._find(session, collection, key)
            if document is None:
                return False
            session.delete(document)
            session.commit()
            return True

    def list_all(self, collection: str) -> list[Record]:
        """Return all records of a collection in insertion order."""
        with self.get_session() as session:
            statement = (
                select(Document).where(Document.collection == collection).order_by(Document.id)
            )
            return [dict(document.data) for document in session.exec(statement).all()]

    def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        """Return records whose top-level field equals value.

        Args:
            collection: Collection name.
            field: Top-level record field to compare.
            value: Value the field must equal.

        Returns:
            Matching records in insertion order.
        """
        with self.get_session() as session:
            statement = (
                select(Document)
                .where(
                    Document.collection == collection,
                    func.json_extract(Document.data, f"$.{field}") == value,
                )
                .order_by(Document.id)
            )
            return [dict(document.data) for document in session.exec(statement).all()]
