"""
Memory implementation of the generic Repository protocol.

This module provides an in-memory implementation that keeps entities in a
Python dictionary keyed by identifier, making it ideal for testing scenarios
where external dependencies should be avoided and as the reference
implementation of the contract.

Ordering: ``list_all`` returns entities in insertion order. Overwriting an
existing record keeps its original position.

Concurrency: a single lock guards the dictionary and the id counter for the
duration of each operation. There is no locking across operations, so a
read followed by a save (as in EntityManager.rename) is not atomic.
"""

import logging
import threading
from typing import Dict, List, Type

from entity_store.errors import NotFoundError
from entity_store.repositories import Repository, T
from entity_store.validation import ensure_entity_type

logger = logging.getLogger(__name__)


class MemoryRepository(Repository[T]):
    """
    Memory implementation of Repository using a Python dictionary.

    Identifiers come from a monotonically increasing counter starting at 1
    and are never reused within the lifetime of the instance.
    """

    def __init__(self, model_class: Type[T]) -> None:
        """Initialize repository with empty in-memory storage.

        Args:
            model_class: The entity model stored by this repository
        """
        self.model_class = model_class
        self.entity_name = model_class.__name__
        self._entities: Dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.Lock()

        logger.debug(
            "Initializing MemoryRepository",
            extra={"entity_name": self.entity_name},
        )

    def save(self, entity: T) -> int:
        ensure_entity_type(entity, self.model_class)
        with self._lock:
            if entity.entity_id is None:
                entity_id = self._next_id
                self._next_id += 1
                stored = entity.model_copy(
                    update={"entity_id": entity_id}, deep=True
                )
                inserted = True
            else:
                entity_id = entity.entity_id
                inserted = entity_id not in self._entities
                # An explicit id must never be handed out again later
                self._next_id = max(self._next_id, entity_id + 1)
                stored = entity.model_copy(deep=True)

            self._entities[entity_id] = stored

        logger.info(
            "MemoryRepository: %s saved successfully",
            self.entity_name,
            extra={
                "entity_name": self.entity_name,
                "entity_id": entity_id,
                "inserted": inserted,
            },
        )
        return entity_id

    def get(self, entity_id: int) -> T:
        with self._lock:
            entity = self._entities.get(entity_id)
            if entity is not None:
                entity = entity.model_copy(deep=True)

        if entity is None:
            logger.debug(
                "MemoryRepository: %s not found",
                self.entity_name,
                extra={
                    "entity_name": self.entity_name,
                    "entity_id": entity_id,
                },
            )
            raise NotFoundError(self.entity_name, entity_id)

        return entity

    def delete(self, entity_id: int) -> None:
        with self._lock:
            removed = self._entities.pop(entity_id, None)

        if removed is None:
            logger.debug(
                "MemoryRepository: cannot delete missing %s",
                self.entity_name,
                extra={
                    "entity_name": self.entity_name,
                    "entity_id": entity_id,
                },
            )
            raise NotFoundError(self.entity_name, entity_id)

        logger.info(
            "MemoryRepository: %s deleted",
            self.entity_name,
            extra={"entity_name": self.entity_name, "entity_id": entity_id},
        )

    def list_all(self) -> List[T]:
        with self._lock:
            return [
                entity.model_copy(deep=True)
                for entity in self._entities.values()
            ]
