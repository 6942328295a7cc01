# ABOUTME: Connection workflow: the none -> pending -> connected state machine.
# ABOUTME: Request, accept, remove, status lookup and connection listing per member.

from datetime import UTC, datetime

import structlog

from business_network.errors import UnauthenticatedError
from business_network.models.connection import Connection, ConnectionStatus, connection_key
from business_network.network.exceptions import (
    ConnectionAlreadyExists,
    ConnectionNotFound,
    SelfConnectionError,
)
from business_network.store.exceptions import DocumentAlreadyExists
from business_network.store.ports import DocumentStore

logger = structlog.get_logger(__name__)

CONNECTIONS_COLLECTION = "connections"


def require_caller(user_id: str | None) -> str:
    """Return the caller id, or raise if none was resolved.

    Raises:
        UnauthenticatedError: If user_id is None or blank.
    """
    if not user_id or not user_id.strip():
        raise UnauthenticatedError("Operation requires a signed-in member")
    return user_id


class ConnectionWorkflow:
    """Service applying connection state transitions to the document store.

    One record exists per member pair, stored under a key built from the
    sorted pair, so lookups never depend on who sent the request.
    """

    def __init__(self, store: DocumentStore) -> None:
        """Initialize the workflow.

        Args:
            store: Document store holding the connections collection.
        """
        self._store = store

    def _load(self, user_a: str, user_b: str) -> Connection | None:
        record = self._store.get(CONNECTIONS_COLLECTION, connection_key(user_a, user_b))
        return Connection.model_validate(record) if record is not None else None

    def request(self, requester_id: str, target_id: str) -> Connection:
        """Send a connection request.

        Args:
            requester_id: The caller sending the request.
            target_id: The member receiving it.

        Returns:
            The new pending connection.

        Raises:
            UnauthenticatedError: If requester_id is missing.
            SelfConnectionError: If requester and target are the same member.
            ConnectionAlreadyExists: If the pair already has a record in either direction.
        """
        require_caller(requester_id)
        if not target_id:
            raise ValueError("target_id must not be empty")
        if requester_id == target_id:
            raise SelfConnectionError("Cannot send a connection request to yourself")

        now = datetime.now(UTC)
        connection = Connection(
            from_user_id=requester_id,
            to_user_id=target_id,
            status=ConnectionStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        try:
            self._store.create(CONNECTIONS_COLLECTION, connection.key, connection.to_record())
        except DocumentAlreadyExists as e:
            raise ConnectionAlreadyExists(requester_id, target_id) from e

        logger.info("connection_requested", from_user_id=requester_id, to_user_id=target_id)
        return connection

    def accept(self, from_user_id: str, to_user_id: str) -> Connection:
        """Accept the pending request sent by from_user_id to to_user_id.

        Args:
            from_user_id: The member who sent the request.
            to_user_id: The member accepting it.

        Returns:
            The connection with status connected.

        Raises:
            UnauthenticatedError: If to_user_id is missing.
            ConnectionNotFound: If no pending request exists in exactly that direction.
        """
        require_caller(to_user_id)
        connection = self._load(from_user_id, to_user_id)
        if (
            connection is None
            or connection.status != ConnectionStatus.PENDING
            or connection.from_user_id != from_user_id
        ):
            raise ConnectionNotFound(from_user_id, to_user_id)

        accepted = connection.model_copy(
            update={"status": ConnectionStatus.CONNECTED, "updated_at": datetime.now(UTC)}
        )
        # Full record so a concurrent remove cannot leave a partial one behind
        self._store.put(CONNECTIONS_COLLECTION, accepted.key, accepted.to_record())
        logger.info("connection_accepted", from_user_id=from_user_id, to_user_id=to_user_id)
        return accepted

    def remove(self, user_a: str, user_b: str) -> bool:
        """Withdraw, decline or remove the relationship between two members.

        Direction and status do not matter. Removing a pair with no record
        is a no-op.

        Returns:
            True if a record was deleted, False if there was none.

        Raises:
            UnauthenticatedError: If user_a is missing.
        """
        require_caller(user_a)
        removed = self._store.delete(CONNECTIONS_COLLECTION, connection_key(user_a, user_b))
        if removed:
            logger.info("connection_removed", user_a=user_a, user_b=user_b)
        return removed

    def get_status(self, user_a: str, user_b: str) -> ConnectionStatus:
        """Return the relationship status of a pair, the same in both directions."""
        connection = self._load(user_a, user_b)
        return connection.status if connection is not None else ConnectionStatus.NONE

    def get_connection(self, user_a: str, user_b: str) -> Connection | None:
        """Return the pair's connection record, or None."""
        return self._load(user_a, user_b)

    def list_connections(
        self, user_id: str, status: ConnectionStatus | None = None
    ) -> list[Connection]:
        """List the relationships of a member, one per counterpart.

        Args:
            user_id: Member whose relationships are listed.
            status: Optional status to filter by.

        Returns:
            Connections where the member is requester or target, de-duplicated
            by the other party's id.

        Raises:
            UnauthenticatedError: If user_id is missing.
        """
        require_caller(user_id)
        sent = self._store.query_equals(CONNECTIONS_COLLECTION, "from_user_id", user_id)
        received = self._store.query_equals(CONNECTIONS_COLLECTION, "to_user_id", user_id)

        by_counterpart: dict[str, Connection] = {}
        for record in [*sent, *received]:
            connection = Connection.model_validate(record)
            by_counterpart[connection.counterpart_of(user_id)] = connection

        connections = list(by_counterpart.values())
        if status is not None:
            connections = [c for c in connections if c.status == status]
        return connections
