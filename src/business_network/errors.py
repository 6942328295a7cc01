# ABOUTME: Base exception classes for business network application errors.
# ABOUTME: Defines the NotFound / AlreadyExists / Unauthenticated / StoreUnavailable taxonomy.


class BusinessNetworkError(Exception):
    """Base exception for all business network errors.

    This is the root exception class for the application. All custom
    exceptions inherit from this class so the CLI can handle them in one
    place.
    """

    pass


class NotFoundError(BusinessNetworkError):
    """Raised when no profile or connection exists for the given ids."""

    pass


class AlreadyExistsError(BusinessNetworkError):
    """Raised when a record that must be unique already exists."""

    pass


class UnauthenticatedError(BusinessNetworkError):
    """Raised when an operation is invoked without a resolved caller id."""

    pass


class StoreUnavailableError(BusinessNetworkError):
    """Raised when the backing document store fails transiently."""

    pass
