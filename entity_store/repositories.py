"""
Generic repository protocol for entity storage.

This module defines the Repository contract once, parameterised by entity
type, so that the same shape backs any ``Identified`` model instead of being
duplicated per entity kind.

All repository operations follow the same principles:

- **Upsert semantics**: ``save`` creates a record when the entity has no id
  and overwrites (or inserts) the record at the entity's id otherwise.

- **Explicit failures**: missing records raise ``NotFoundError``; stores that
  depend on external systems raise ``StorageUnavailableError``. Nothing is
  signalled by returning ``None``.

- **Copy semantics**: a repository owns its stored state. Entities passed in
  and handed out are copies, so callers change stored state only through
  ``save``.

- **Domain Objects**: Methods accept and return domain objects or
  primitives, never framework-specific types.

Architectural Notes:

- This is a pure interface with no implementation details
- Use case classes depend on this protocol, not on concrete implementations
- Implementations are chosen at construction time and injected
"""

from typing import List, Protocol, TypeVar, runtime_checkable

from entity_store.domain import Identified

# Type variable bound to the Identified base model for stored entities
T = TypeVar("T", bound=Identified)


@runtime_checkable
class Repository(Protocol[T]):
    """Generic CRUD repository protocol.

    Type Parameter:
        T: The stored model type (must extend Identified)
    """

    def save(self, entity: T) -> int:
        """Create or overwrite an entity.

        Args:
            entity: Complete entity to store. If ``entity.entity_id`` is
                None a new identifier is assigned; otherwise the record at
                that identifier is replaced, or inserted if absent.

        Returns:
            The effective identifier of the stored record

        Raises:
            StorageUnavailableError: If the backing store cannot be reached

        Implementation Notes:
        - Newly assigned identifiers are never reused by the same store,
          even after the record is deleted
        - Overwriting must not create a second record
        """
        ...

    def get(self, entity_id: int) -> T:
        """Retrieve an entity by identifier.

        Args:
            entity_id: Identifier returned by a previous save

        Returns:
            A copy of the stored entity, with its identifier attached

        Raises:
            NotFoundError: If no record exists at that identifier
            StorageUnavailableError: If the backing store cannot be reached
        """
        ...

    def delete(self, entity_id: int) -> None:
        """Delete an entity by identifier.

        Args:
            entity_id: Identifier of the record to remove

        Raises:
            NotFoundError: If no record exists at that identifier. Deleting
                an id twice raises on the second call.
            StorageUnavailableError: If the backing store cannot be reached
        """
        ...

    def list_all(self) -> List[T]:
        """List every stored entity.

        Returns:
            Copies of all stored entities. The order is stable and is
            documented by each implementation.

        Raises:
            StorageUnavailableError: If the backing store cannot be reached
        """
        ...
