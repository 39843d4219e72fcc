import pytest

from entity_store.domain import Entity
from entity_store.repos.memory import MemoryRepository


@pytest.fixture
def memory_repo() -> MemoryRepository[Entity]:
    """Provide an empty in-memory entity repository."""
    return MemoryRepository(Entity)
