"""
Error taxonomy shared by every Repository implementation.

Repositories report failures by raising one of these exceptions. Callers
(including EntityManager) never have to know which backing store raised
them, so storage-library exceptions are always translated at the
repository boundary.
"""

from typing import Any


class RepositoryError(Exception):
    """Base class for all repository contract failures"""

    pass


class NotFoundError(RepositoryError):
    """Raised when an operation references an identifier with no record"""

    def __init__(self, entity_name: str, entity_id: Any) -> None:
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} not found: {entity_id}")


class StorageUnavailableError(RepositoryError):
    """Raised when a backing store cannot complete an operation.

    The in-memory repository never raises this.
    """

    pass


class InvalidArgumentError(RepositoryError, ValueError):
    """Raised for malformed input, such as an empty name on rename"""

    pass
