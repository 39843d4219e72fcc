from entity_store.config import Settings, StorageBackend
from entity_store.domain import Entity
from entity_store.repos.factory import create_minio_client, repository_factory
from entity_store.repos.memory import MemoryRepository
from entity_store.repos.minio import MinioClient, MinioRepository
from entity_store.repos.minio.tests.fake_client import FakeMinioClient
from entity_store.repositories import Repository


def test_default_settings_build_memory_repository() -> None:
    repo = repository_factory(Entity)

    assert isinstance(repo, MemoryRepository)
    assert isinstance(repo, Repository)


def test_minio_backend_uses_given_client_and_bucket() -> None:
    client = FakeMinioClient()
    settings = Settings(
        backend=StorageBackend.MINIO, minio_bucket_name="configured"
    )

    repo = repository_factory(Entity, settings, client=client)

    assert isinstance(repo, MinioRepository)
    assert repo.bucket_name == "configured"
    assert "configured" in client.buckets


def test_memory_backend_ignores_client() -> None:
    client = FakeMinioClient()

    repo = repository_factory(
        Entity, Settings(backend=StorageBackend.MEMORY), client=client
    )

    assert isinstance(repo, MemoryRepository)
    assert client.buckets == set()

def test_create_minio_client_from_settings() -> None:
    settings = Settings(minio_endpoint="minio.internal:9000")

    client = create_minio_client(settings)

    assert isinstance(client, MinioClient)
