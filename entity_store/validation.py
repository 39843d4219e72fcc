"""
Runtime checks at the repository boundary.

Two things are checked here rather than left to fail later:

- an object handed to a use case or returned by the factory really
  provides every Repository operation (``ensure_repository``);
- an entity handed to ``save`` is of the model type the store was built
  for (``ensure_entity_type``). Without this a memory store would accept a
  foreign model that a Minio store could never read back.
"""

import logging
from typing import Any, Type

from entity_store.errors import InvalidArgumentError
from entity_store.repositories import Repository

logger = logging.getLogger(__name__)

REPOSITORY_OPERATIONS = ("save", "get", "delete", "list_all")


class RepositoryValidationError(Exception):
    """Raised when an object does not provide the Repository operations"""

    pass


def ensure_repository(candidate: Any) -> Repository[Any]:
    """
    Return ``candidate`` typed as a Repository, or fail naming what is missing.

    Raises:
        RepositoryValidationError: If any Repository operation is missing

    Example:
        >>> from entity_store.domain import Entity
        >>> from entity_store.repos.memory import MemoryRepository
        >>> repo = ensure_repository(MemoryRepository(Entity))
    """
    if isinstance(candidate, Repository):
        return candidate

    missing = [
        name
        for name in REPOSITORY_OPERATIONS
        if not callable(getattr(candidate, name, None))
    ]
    logger.error(
        "Object is not a Repository",
        extra={
            "repository_type": type(candidate).__name__,
            "missing_operations": missing,
        },
    )
    raise RepositoryValidationError(
        f"{type(candidate).__name__} is not a Repository; "
        f"missing: {', '.join(missing)}"
    )


def ensure_entity_type(entity: Any, model_class: Type[Any]) -> None:
    """Reject entities a store built for ``model_class`` cannot hold.

    The type must match exactly. A subclass instance would come back from a
    Minio store as the base model but from a memory store unchanged.

    Raises:
        InvalidArgumentError: If entity is not a ``model_class`` instance
    """
    if type(entity) is not model_class:
        raise InvalidArgumentError(
            f"Expected {model_class.__name__}, got {type(entity).__name__}"
        )
