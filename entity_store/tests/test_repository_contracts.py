"""
Repository contract tests to verify that all implementations comply with
the Repository protocol.

These tests ensure that all repository implementations (memory, Minio)
behave consistently, so one can be swapped for another without changes to
the code that uses them.
"""

from abc import ABC, abstractmethod

import pytest

from entity_store.domain import Entity, Identified
from entity_store.errors import InvalidArgumentError, NotFoundError
from entity_store.repos.memory import MemoryRepository
from entity_store.repos.minio import MinioRepository
from entity_store.repos.minio.tests.fake_client import FakeMinioClient
from entity_store.repositories import Repository
from entity_store.usecase import EntityManager
from entity_store.tests.factories import EntityFactory


class Tag(Identified):
    label: str


class RepositoryContractTestMixin(ABC):
    """
    Contract test mixin for Repository implementations.

    Subclasses must implement create_repository() to return an empty,
    configured repository instance for testing.
    """

    @abstractmethod
    def create_repository(self) -> Repository[Entity]:
        """Create an empty repository instance for testing."""
        pass

    def test_satisfies_protocol(self) -> None:
        """Contract: implementations are runtime-checkable Repositories."""
        repo = self.create_repository()

        assert isinstance(repo, Repository)

    def test_empty_store_lists_nothing(self) -> None:
        repo = self.create_repository()

        assert repo.list_all() == []

    def test_save_new_entity_returns_fresh_id(self) -> None:
        """Contract: saving without an id assigns one never issued before."""
        repo = self.create_repository()

        first = repo.save(EntityFactory())
        second = repo.save(EntityFactory())

        assert isinstance(first, int)
        assert first != second

    def test_get_returns_saved_entity_with_id(self) -> None:
        repo = self.create_repository()
        entity = EntityFactory()

        entity_id = repo.save(entity)
        retrieved = repo.get(entity_id)

        assert retrieved.entity_id == entity_id
        assert retrieved.name == entity.name

    def test_save_with_existing_id_overwrites(self) -> None:
        """Contract: saving with an existing id replaces, never duplicates."""
        repo = self.create_repository()
        entity_id = repo.save(Entity(name="Before"))
        repo.save(Entity(name="Other"))

        returned = repo.save(Entity(entity_id=entity_id, name="After"))

        assert returned == entity_id
        assert repo.get(entity_id).name == "After"
        assert len(repo.list_all()) == 2

    def test_save_with_unknown_id_inserts(self) -> None:
        """Contract: save is an upsert."""
        repo = self.create_repository()

        returned = repo.save(Entity(entity_id=7, name="Seven"))

        assert returned == 7
        assert repo.get(7).name == "Seven"

    def test_save_rejects_other_model_type(self) -> None:
        """Contract: a store only accepts the model it was built for, and a
        rejected save writes nothing."""
        repo = self.create_repository()

        with pytest.raises(InvalidArgumentError):
            repo.save(Tag(label="x"))  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            repo.save(Tag(entity_id=5, label="x"))  # type: ignore[arg-type]

        assert repo.list_all() == []
        assert repo.save(EntityFactory()) == 1

    def test_get_missing_raises_not_found(self) -> None:
        repo = self.create_repository()

        with pytest.raises(NotFoundError):
            repo.get(12345)

    def test_delete_missing_raises_not_found(self) -> None:
        repo = self.create_repository()

        with pytest.raises(NotFoundError):
            repo.delete(12345)

    def test_delete_removes_entity(self) -> None:
        repo = self.create_repository()
        keep_id = repo.save(EntityFactory())
        drop_id = repo.save(EntityFactory())

        repo.delete(drop_id)

        assert [e.entity_id for e in repo.list_all()] == [keep_id]
        with pytest.raises(NotFoundError):
            repo.get(drop_id)

    def test_delete_twice_raises_not_found(self) -> None:
        """Contract: deleting an already-deleted id is reported."""
        repo = self.create_repository()
        entity_id = repo.save(EntityFactory())
        repo.delete(entity_id)

        with pytest.raises(NotFoundError):
            repo.delete(entity_id)

    def test_list_in_insertion_order_for_generated_ids(self) -> None:
        repo = self.create_repository()
        names = [f"entity-{i}" for i in range(5)]
        for name in names:
            repo.save(Entity(name=name))

        assert [e.name for e in repo.list_all()] == names

    def test_walkthrough_scenario(self) -> None:
        """Save two, delete one, rename the other."""
        repo = self.create_repository()
        manager = EntityManager(repo)

        assert repo.save(Entity(name="Alice")) == 1
        assert repo.save(Entity(name="Bob")) == 2
        assert [(e.entity_id, e.name) for e in repo.list_all()] == [
            (1, "Alice"),
            (2, "Bob"),
        ]

        repo.delete(1)
        assert [e.name for e in repo.list_all()] == ["Bob"]
        with pytest.raises(NotFoundError):
            repo.get(1)

        manager.rename(2, "Robert")
        assert repo.get(2).name == "Robert"


class TestMemoryRepositoryContract(RepositoryContractTestMixin):
    """Test MemoryRepository against the contract."""

    def create_repository(self) -> Repository[Entity]:
        return MemoryRepository(Entity)


class TestMinioRepositoryContract(RepositoryContractTestMixin):
    """Test MinioRepository, over the fake client, against the contract."""

    def create_repository(self) -> Repository[Entity]:
        return MinioRepository(FakeMinioClient(), Entity)
