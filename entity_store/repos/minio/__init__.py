"""
Minio repository implementations.
"""

from .client import MinioClient, MinioRepositoryMixin
from .repository import MinioRepository

__all__ = ["MinioClient", "MinioRepositoryMixin", "MinioRepository"]
