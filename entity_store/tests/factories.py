"""
Test factories for creating domain objects using factory_boy.

Design decisions documented:
- Entities are built unsaved (entity_id None) so the repository under test
  assigns the identifier
- Names come from Faker so tests do not depend on particular values
"""

from factory.base import Factory
from factory.faker import Faker

from entity_store.domain import Entity


class EntityFactory(Factory):
    """Factory for creating unsaved Entity instances."""

    class Meta:
        model = Entity

    entity_id = None
    name = Faker("name")
