"""
Defines the use cases for entity management.
"""

import logging
from typing import Generic, TypeVar

from .domain import Entity
from .errors import InvalidArgumentError
from .repositories import Repository
from .validation import ensure_repository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class EntityManager(Generic[E]):
    """
    Business operations on named entities.

    This use case follows the Clean Architecture pattern, depending on the
    Repository abstraction rather than on any concrete store. The repository
    is injected at construction and borrowed: the caller that built it owns
    its lifecycle.

    Failures raised by the repository are never recovered here; they reach
    the caller unchanged.
    """

    def __init__(self, repository: Repository[E]):
        self.repository = ensure_repository(repository)

    def rename(self, entity_id: int, new_name: str) -> E:
        """
        Give an existing entity a new display name.

        1. Rejects empty or whitespace-only names before touching the store.
        2. Fetches the entity (NotFoundError propagates unchanged).
        3. Sets the new name and saves under the existing identifier.

        The fetch and the save are separate repository calls, each atomic on
        its own. Two concurrent renames of the same entity may interleave,
        and the later save wins.

        Returns:
            The renamed entity as saved

        Raises:
            InvalidArgumentError: If new_name is empty or blank
            NotFoundError: If no entity exists at entity_id
        """
        if not new_name or not new_name.strip():
            raise InvalidArgumentError(
                f"New name for entity {entity_id} must not be empty"
            )

        logger.debug(
            "Renaming entity",
            extra={"entity_id": entity_id, "new_name": new_name},
        )

        entity = self.repository.get(entity_id)
        old_name = entity.name
        entity.name = new_name
        self.repository.save(entity)

        logger.info(
            "Entity renamed",
            extra={
                "entity_id": entity_id,
                "old_name": old_name,
                "new_name": new_name,
                "repository": type(self.repository).__name__,
            },
        )
        return entity
