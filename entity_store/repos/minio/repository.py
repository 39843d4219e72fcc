"""
Minio implementation of the generic Repository protocol.

Each entity is stored as a JSON object named ``<prefix>/<entity_id>`` in a
single bucket. The id sequence for a prefix is persisted as its own object
at ``_sequences/<prefix>``, so identifiers stay unique across repository
instances pointed at the same bucket.

Ordering: ``list_all`` returns entities by ascending identifier. For
store-assigned ids this is insertion order.

Errors: ``NoSuchKey`` becomes ``NotFoundError``. Any other S3 error, any
transport failure, and any stored object that does not decode to the model
becomes ``StorageUnavailableError``, chained to the original exception.
Objects under the prefix whose last name segment is not a number are not
entities and are skipped by ``list_all``.

Concurrency: sequence updates and writes are serialised by a lock held for
one operation at a time. The lock is process-local; several processes
assigning ids in the same bucket are not coordinated.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional, Type

from minio.error import S3Error
from pydantic import ValidationError

from entity_store.errors import (
    InvalidArgumentError,
    NotFoundError,
    StorageUnavailableError,
)
from entity_store.repositories import Repository, T
from entity_store.validation import ensure_entity_type
from .client import (
    TRANSPORT_ERRORS,
    MinioClient,
    MinioRepositoryMixin,
    is_no_such_key,
)

SEQUENCE_PREFIX = "_sequences"

# JSONDecodeError and UnicodeDecodeError are ValueErrors too
DECODE_ERRORS = (ValueError, ValidationError)


class MinioRepository(Repository[T], MinioRepositoryMixin):
    """
    Minio implementation of Repository using Minio for persistence.

    Storage layout (one bucket, many entity kinds):
    - Entities: ``<prefix>/<entity_id>`` JSON objects
    - Sequence: ``_sequences/<prefix>`` holding the last issued id
    """

    def __init__(
        self,
        client: MinioClient,
        model_class: Type[T],
        bucket_name: str = "entities",
        prefix: Optional[str] = None,
    ) -> None:
        """Initialize repository with Minio client.

        Args:
            client: MinioClient protocol implementation (real or fake)
            model_class: The entity model stored by this repository
            bucket_name: Bucket holding entity and sequence objects
            prefix: Object name prefix; defaults to the lowercased model
                class name. Must not contain "/", or listing one prefix
                would pick up the objects of another, and must not be
                the sequence prefix.

        Raises:
            InvalidArgumentError: If prefix contains "/" or is reserved
        """
        prefix = prefix or model_class.__name__.lower()
        if "/" in prefix or prefix == SEQUENCE_PREFIX:
            raise InvalidArgumentError(
                f"Invalid Minio prefix for {model_class.__name__}: {prefix!r}"
            )

        self.client = client
        self.model_class = model_class
        self.entity_name = model_class.__name__
        self.bucket_name = bucket_name
        self.prefix = prefix
        self.sequence_object = f"{SEQUENCE_PREFIX}/{self.prefix}"
        self.logger = logging.getLogger("MinioRepository")
        self._lock = threading.Lock()
        self.ensure_buckets_exist([self.bucket_name])

    def _object_name(self, entity_id: int) -> str:
        return f"{self.prefix}/{entity_id}"

    def _storage_unavailable(
        self, action: str, error: Exception, entity_id: Optional[int] = None
    ) -> StorageUnavailableError:
        self.logger.error(
            f"MinioRepository: Error during {action}",
            extra={
                "entity_name": self.entity_name,
                "entity_id": entity_id,
                "bucket": self.bucket_name,
                "error": str(error),
                "error_type": type(error).__name__,
            },
            exc_info=True,
        )
        return StorageUnavailableError(
            f"Minio {action} failed for {self.entity_name}: {error}"
        )

    def _read_sequence(self) -> int:
        try:
            data = self.get_json_object(
                self.bucket_name, self.sequence_object
            )
        except S3Error as e:
            if is_no_such_key(e):
                return 0
            raise
        try:
            return int(data["last_id"])
        except (KeyError, TypeError) as e:
            raise ValueError(
                f"Malformed sequence object {self.sequence_object}"
            ) from e

    def _write_sequence(self, last_id: int) -> None:
        self.put_json_object(
            self.bucket_name,
            self.sequence_object,
            f'{{"last_id": {last_id}}}',
        )

    def _read_entity(self, entity_id: int) -> T:
        data = self.get_json_object(
            self.bucket_name, self._object_name(entity_id)
        )
        return self.model_class.model_validate(data)

    def save(self, entity: T) -> int:
        ensure_entity_type(entity, self.model_class)
        try:
            with self._lock:
                last_id = self._read_sequence()
                if entity.entity_id is None:
                    entity_id = last_id + 1
                    entity = entity.model_copy(update={"entity_id": entity_id})
                else:
                    entity_id = entity.entity_id
                if entity_id > last_id:
                    self._write_sequence(entity_id)

                self.put_json_object(
                    self.bucket_name,
                    self._object_name(entity_id),
                    entity.model_dump_json(),
                    metadata={
                        "entity_name": self.entity_name,
                        "saved_at": datetime.now(timezone.utc).isoformat(),
                    },
                )
        except (S3Error, *TRANSPORT_ERRORS, *DECODE_ERRORS) as e:
            raise self._storage_unavailable(
                "save", e, entity.entity_id
            ) from e

        self.logger.info(
            "MinioRepository: Entity saved successfully",
            extra={
                "entity_name": self.entity_name,
                "entity_id": entity_id,
                "bucket": self.bucket_name,
            },
        )
        return entity_id

    def get(self, entity_id: int) -> T:
        try:
            return self._read_entity(entity_id)
        except S3Error as e:
            if is_no_such_key(e):
                self.logger.debug(
                    "MinioRepository: Entity not found (NoSuchKey)",
                    extra={
                        "entity_name": self.entity_name,
                        "entity_id": entity_id,
                    },
                )
                raise NotFoundError(self.entity_name, entity_id) from e
            raise self._storage_unavailable("get", e, entity_id) from e
        except (*TRANSPORT_ERRORS, *DECODE_ERRORS) as e:
            raise self._storage_unavailable("get", e, entity_id) from e

    def delete(self, entity_id: int) -> None:
        object_name = self._object_name(entity_id)
        try:
            with self._lock:
                # remove_object succeeds on missing keys, so check first
                self.client.stat_object(
                    bucket_name=self.bucket_name, object_name=object_name
                )
                self.client.remove_object(
                    bucket_name=self.bucket_name, object_name=object_name
                )
        except S3Error as e:
            if is_no_such_key(e):
                raise NotFoundError(self.entity_name, entity_id) from e
            raise self._storage_unavailable("delete", e, entity_id) from e
        except TRANSPORT_ERRORS as e:
            raise self._storage_unavailable("delete", e, entity_id) from e

        self.logger.info(
            "MinioRepository: Entity deleted",
            extra={"entity_name": self.entity_name, "entity_id": entity_id},
        )

    def _list_entity_ids(self) -> List[int]:
        entity_ids = []
        for name in self.iter_object_names(
            self.bucket_name, f"{self.prefix}/"
        ):
            segment = name[len(self.prefix) + 1:]
            if not (segment.isascii() and segment.isdigit()):
                self.logger.debug(
                    "MinioRepository: Skipping non-entity object",
                    extra={"bucket": self.bucket_name, "object_name": name},
                )
                continue
            entity_ids.append(int(segment))
        return sorted(entity_ids)

    def list_all(self) -> List[T]:
        try:
            entities = []
            for entity_id in self._list_entity_ids():
                try:
                    entities.append(self._read_entity(entity_id))
                except S3Error as e:
                    # Deleted between listing and reading
                    if is_no_such_key(e):
                        continue
                    raise
        except (S3Error, *TRANSPORT_ERRORS, *DECODE_ERRORS) as e:
            raise self._storage_unavailable("list", e) from e

        self.logger.debug(
            "MinioRepository: Listed entities",
            extra={"entity_name": self.entity_name, "count": len(entities)},
        )
        return entities
