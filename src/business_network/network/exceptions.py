# ABOUTME: Exceptions for the connection-request workflow.
# ABOUTME: ConnectionNotFound, ConnectionAlreadyExists and SelfConnectionError.

from business_network.errors import AlreadyExistsError, BusinessNetworkError, NotFoundError


class ConnectionNotFound(NotFoundError):
    """Raised when no pending request exists in the expected direction.

    Attributes:
        from_user_id: Expected requester.
        to_user_id: Expected target.
    """

    def __init__(self, from_user_id: str, to_user_id: str) -> None:
        super().__init__(f"No pending request from '{from_user_id}' to '{to_user_id}'")
        self.from_user_id = from_user_id
        self.to_user_id = to_user_id


class ConnectionAlreadyExists(AlreadyExistsError):
    """Raised when a request targets a pair that already has a record, in either direction."""

    def __init__(self, user_a: str, user_b: str) -> None:
        super().__init__(f"A connection between '{user_a}' and '{user_b}' already exists")
        self.user_a = user_a
        self.user_b = user_b


class SelfConnectionError(BusinessNetworkError):
    """Raised when a member tries to connect with themselves."""

    pass
