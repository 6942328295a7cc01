# ABOUTME: Exception classes raised by document store implementations.
# ABOUTME: Contains DocumentAlreadyExists for failed atomic creates.

from business_network.errors import AlreadyExistsError


class DocumentAlreadyExists(AlreadyExistsError):
    """Raised when create() targets a key that is already present.

    Attributes:
        collection: Collection the create was attempted in.
        key: The conflicting key.
    """

    def __init__(self, collection: str, key: str) -> None:
        super().__init__(f"Document '{key}' already exists in '{collection}'")
        self.collection = collection
        self.key = key
