# ABOUTME: Exceptions for profile storage and account/session handling.
# ABOUTME: Each maps onto the NotFound / AlreadyExists / Unauthenticated taxonomy.

from business_network.errors import (
    AlreadyExistsError,
    BusinessNetworkError,
    NotFoundError,
    UnauthenticatedError,
)


class ProfileNotFound(NotFoundError):
    """Raised when no profile exists for a user id."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"No profile found for user '{user_id}'")
        self.user_id = user_id


class ProfileAlreadyExists(AlreadyExistsError):
    """Raised when a profile is registered twice for the same user id."""

    pass


class ProfileUpdateError(BusinessNetworkError):
    """Raised when an update touches an immutable or unknown profile field."""

    pass


class EmailAlreadyInUse(AlreadyExistsError):
    """Raised when an account already exists for the e-mail address."""

    pass


class InvalidRegistration(BusinessNetworkError):
    """Raised when registration input (e-mail, password) is rejected."""

    pass


class InvalidCredentials(UnauthenticatedError):
    """Raised when e-mail and password do not match an account."""

    pass
