"""
MinioClient protocol definition and shared Minio repository helpers.

This module defines the protocol interface that both the real Minio client
and our fake test client must implement. Repositories depend on this
abstraction rather than on ``minio.Minio`` directly, so they can be
exercised without a running Minio server.
"""

import io
import json
import logging
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    Optional,
    Protocol,
    runtime_checkable,
)

from minio.error import S3Error
from urllib3.exceptions import HTTPError

from entity_store.errors import StorageUnavailableError

# Transport-level failures raised while talking to Minio
TRANSPORT_ERRORS = (HTTPError, OSError)


@runtime_checkable
class MinioClient(Protocol):
    """
    Protocol defining the MinIO client interface used by the repository.

    This protocol captures only the methods we actually use, making our
    dependency explicit and testable. Both the real minio.Minio client and
    our FakeMinioClient implement this protocol.
    """

    def bucket_exists(self, bucket_name: str) -> bool:
        """Check if a bucket exists."""
        ...

    def make_bucket(self, bucket_name: str) -> None:
        """Create a bucket.

        Raises:
            S3Error: If bucket creation fails
        """
        ...

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: Any,
        length: int,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Store an object in the bucket.

        Raises:
            S3Error: If object storage fails
        """
        ...

    def get_object(self, bucket_name: str, object_name: str) -> Any:
        """Retrieve an object from the bucket.

        Returns:
            Response whose ``read()`` yields the object bytes. Callers must
            ``close()`` and ``release_conn()`` it.

        Raises:
            S3Error: If object retrieval fails (e.g., NoSuchKey)
        """
        ...

    def stat_object(self, bucket_name: str, object_name: str) -> Any:
        """Get object metadata without retrieving the object data.

        Raises:
            S3Error: If object doesn't exist (NoSuchKey) or other errors
        """
        ...

    def remove_object(self, bucket_name: str, object_name: str) -> None:
        """Remove an object. Removing a missing object is not an error."""
        ...

    def list_objects(
        self,
        bucket_name: str,
        prefix: Optional[str] = None,
        recursive: bool = False,
    ) -> Iterable[Any]:
        """List objects; each item exposes ``object_name``."""
        ...


def is_no_such_key(error: S3Error) -> bool:
    return getattr(error, "code", None) == "NoSuchKey"


class MinioRepositoryMixin:
    """
    Bucket bootstrap and JSON object helpers shared by Minio repositories.

    Classes using this mixin must set ``client`` and ``logger``.
    """

    client: MinioClient
    logger: logging.Logger

    def ensure_buckets_exist(self, bucket_names: Iterable[str]) -> None:
        for bucket_name in bucket_names:
            try:
                if not self.client.bucket_exists(bucket_name=bucket_name):
                    self.logger.info(
                        "Creating bucket",
                        extra={"bucket_name": bucket_name},
                    )
                    self.client.make_bucket(bucket_name=bucket_name)
                else:
                    self.logger.debug(
                        "Bucket already exists",
                        extra={"bucket_name": bucket_name},
                    )
            except (S3Error, *TRANSPORT_ERRORS) as e:
                self.logger.error(
                    "Failed to create bucket",
                    extra={"bucket_name": bucket_name, "error": str(e)},
                )
                raise StorageUnavailableError(
                    f"Cannot prepare bucket {bucket_name}: {e}"
                ) from e

    def get_json_object(
        self, bucket_name: str, object_name: str
    ) -> Dict[str, Any]:
        """Read and decode a JSON object.

        S3Error and transport errors propagate to the caller, which decides
        how ``NoSuchKey`` is reported.
        """
        response = self.client.get_object(
            bucket_name=bucket_name, object_name=object_name
        )
        try:
            data = response.read()
        finally:
            response.close()
            response.release_conn()
        return json.loads(data.decode("utf-8"))

    def put_json_object(
        self,
        bucket_name: str,
        object_name: str,
        payload: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        data = payload.encode("utf-8")
        self.client.put_object(
            bucket_name=bucket_name,
            object_name=object_name,
            data=io.BytesIO(data),
            length=len(data),
            content_type="application/json",
            metadata=metadata,
        )

    def iter_object_names(
        self, bucket_name: str, prefix: str
    ) -> Iterator[str]:
        for obj in self.client.list_objects(
            bucket_name=bucket_name, prefix=prefix, recursive=True
        ):
            yield obj.object_name
