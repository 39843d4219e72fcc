"""
Domain models for entity storage.

These models follow the Pydantic v2 patterns used throughout the project.
Every storable model derives from ``Identified``, which carries the
identifier the repository assigns on first save.

Identifier convention:

- ``entity_id is None`` means "not yet stored"; saving such an entity
  creates a new record and the repository assigns the id.
- Assigned ids are positive integers. ``0`` is never a valid id, so there is
  no ambiguity between "update record 0" and "create a new record".
- ``entity_id`` is frozen: once a model carries an id it cannot be changed by
  assignment. Repositories attach ids by copying the model.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Identified(BaseModel):
    """Base class for any model that can be held by a Repository."""

    model_config = ConfigDict(validate_assignment=True)

    entity_id: Optional[int] = Field(
        None,
        ge=1,
        frozen=True,
        description="Store-assigned identifier; None until first save",
    )

    @property
    def is_new(self) -> bool:
        return self.entity_id is None


class Entity(Identified):
    """A named record with a mutable display name."""

    name: str = Field(
        ..., min_length=1, description="Human-readable display name"
    )
