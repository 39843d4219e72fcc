"""
Factory function for creating Repository implementations.

This module picks the concrete Repository named by configuration. Callers
receive the result typed as the Repository protocol, so nothing downstream
depends on which backend was chosen.
"""

import logging
from typing import Optional, Type

from minio import Minio

from entity_store.config import Settings, StorageBackend
from entity_store.repositories import Repository, T
from entity_store.validation import ensure_repository
from .memory import MemoryRepository
from .minio import MinioClient, MinioRepository

logger = logging.getLogger(__name__)


def create_minio_client(settings: Settings) -> MinioClient:
    """Create a minio.Minio client from settings."""
    logger.debug(
        "Creating new Minio client instance",
        extra={
            "endpoint": settings.minio_endpoint,
            "secure": settings.minio_secure,
        },
    )
    return Minio(
        settings.minio_endpoint,
        access_key=settings.minio_access_key,
        secret_key=settings.minio_secret_key,
        secure=settings.minio_secure,
    )


def repository_factory(
    model_class: Type[T],
    settings: Optional[Settings] = None,
    client: Optional[MinioClient] = None,
) -> Repository[T]:
    """Create a configured Repository for ``model_class``.

    Args:
        model_class: Entity model the repository will store
        settings: Configuration; defaults to ``Settings()`` (memory backend)
        client: Minio client to use instead of building one from settings.
            Ignored by the memory backend.

    Returns:
        Repository implementation validated against the protocol

    Raises:
        ValueError: If the configured backend is not supported
        StorageUnavailableError: If the Minio bucket cannot be prepared

    Example:
        >>> from entity_store.config import Settings, StorageBackend
        >>> from entity_store.domain import Entity
        >>> repo = repository_factory(
        ...     Entity, Settings(backend=StorageBackend.MEMORY)
        ... )
        >>> repo.save(Entity(name="Alice"))
        1
    """
    if settings is None:
        settings = Settings()

    logger.debug(
        "Creating Repository via factory",
        extra={
            "entity_name": model_class.__name__,
            "backend": settings.backend.value,
        },
    )

    repository: object
    if settings.backend == StorageBackend.MEMORY:
        repository = MemoryRepository(model_class)
    elif settings.backend == StorageBackend.MINIO:
        if client is None:
            client = create_minio_client(settings)
        repository = MinioRepository(
            client,
            model_class,
            bucket_name=settings.minio_bucket_name,
        )
    else:
        raise ValueError(f"Unsupported storage backend: {settings.backend}")

    validated = ensure_repository(repository)

    logger.info(
        "Repository created successfully",
        extra={
            "entity_name": model_class.__name__,
            "backend": settings.backend.value,
            "implementation": type(validated).__name__,
        },
    )
    return validated
