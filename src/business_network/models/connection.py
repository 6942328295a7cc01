# ABOUTME: Pydantic model for a relationship record between two members.
# ABOUTME: Records are stored under a canonical key so one pair maps to one record.

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

KEY_SEPARATOR = "_"


class ConnectionStatus(str, Enum):
    """Relationship state between two members."""

    NONE = "none"  # no record
    PENDING = "pending"
    CONNECTED = "connected"


def connection_key(user_a: str, user_b: str) -> str:
    """Return the storage key for the pair, independent of argument order.

    Args:
        user_a: One member id.
        user_b: The other member id.

    Returns:
        The two ids sorted lexically and joined by the key separator.
    """
    first, second = sorted((user_a, user_b))
    return f"{first}{KEY_SEPARATOR}{second}"


class Connection(BaseModel):
    """A connection request or an established connection.

    The requester is always from_user_id, whatever the order of the
    storage key.
    """

    from_user_id: str
    to_user_id: str
    status: ConnectionStatus = ConnectionStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def key(self) -> str:
        """Return the storage key of this record."""
        return connection_key(self.from_user_id, self.to_user_id)

    def counterpart_of(self, user_id: str) -> str:
        """Return the id of the other party.

        Raises:
            ValueError: If user_id is not a party of this connection.
        """
        if user_id == self.from_user_id:
            return self.to_user_id
        if user_id == self.to_user_id:
            return self.from_user_id
        raise ValueError(f"User '{user_id}' is not part of connection {self.key}")

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-compatible record stored for this connection."""
        return self.model_dump(mode="json")
