"""
Repository implementations and infrastructure.

Implementation packages:
- memory: In-memory implementations for testing and local use
- minio: Minio-based implementations for durable storage
"""

from .factory import repository_factory
from .memory import MemoryRepository

__all__ = ["MemoryRepository", "repository_factory"]
