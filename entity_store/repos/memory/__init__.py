"""
Memory repository implementations.

In-memory implementations of the repository protocols, using Python
dictionaries for storage. They are the reference implementation of the
contract and are ideal for testing where external dependencies should be
avoided.
"""

from .repository import MemoryRepository

__all__ = ["MemoryRepository"]
