"""
Entity storage behind a generic repository protocol.

Business logic (``EntityManager``) is written against the ``Repository``
protocol only. Concrete stores live under ``entity_store.repos`` and are
chosen at construction time, usually through ``repository_factory``.
"""

from .domain import Entity, Identified
from .errors import (
    InvalidArgumentError,
    NotFoundError,
    RepositoryError,
    StorageUnavailableError,
)
from .repositories import Repository
from .usecase import EntityManager

__all__ = [
    "Entity",
    "Identified",
    "Repository",
    "EntityManager",
    "RepositoryError",
    "NotFoundError",
    "StorageUnavailableError",
    "InvalidArgumentError",
]
