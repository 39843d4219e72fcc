#!/usr/bin/env python3
"""
Entity rename walkthrough.

Wires a configured repository into EntityManager and runs a short
save/list/delete/rename session against it:

1. Saves Alice and Bob (ids 1 and 2 on an empty store)
2. Deletes Alice
3. Renames Bob to Robert

The backend comes from configuration, so the same script runs against the
in-memory store or a Minio bucket:

    ENTITY_STORE_BACKEND=minio MINIO_ENDPOINT=localhost:9000 \\
        python -m entity_store.examples.rename_example
"""

import logging
import sys
from typing import List, Optional

from entity_store.config import load_settings, setup_logging
from entity_store.domain import Entity
from entity_store.errors import NotFoundError, RepositoryError
from entity_store.repos.factory import repository_factory
from entity_store.repositories import Repository
from entity_store.usecase import EntityManager

logger = logging.getLogger(__name__)


def run_example(repository: Repository[Entity]) -> List[Entity]:
    """Run the walkthrough and return the final contents of the store."""
    manager = EntityManager(repository)

    alice_id = repository.save(Entity(name="Alice"))
    bob_id = repository.save(Entity(name="Bob"))
    logger.info(
        "Saved entities",
        extra={"alice_id": alice_id, "bob_id": bob_id},
    )

    repository.delete(alice_id)
    try:
        repository.get(alice_id)
    except NotFoundError:
        logger.info("Alice is gone", extra={"entity_id": alice_id})

    manager.rename(bob_id, "Robert")
    return repository.list_all()


def main(config_path: Optional[str] = None) -> int:
    settings = load_settings(config_path)
    setup_logging(settings)

    try:
        repository = repository_factory(Entity, settings)
        entities = run_example(repository)
    except RepositoryError as e:
        logger.error(
            "Example failed",
            extra={"error": str(e), "error_type": type(e).__name__},
        )
        return 1

    for entity in entities:
        print(f"{entity.entity_id}: {entity.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))
