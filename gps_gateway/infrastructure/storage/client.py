"""
Object storage client for GPS data documents.

Reads objects from S3 (or any S3-compatible store) with mock mode for
local development.

A download is a scoped resource: the object body is drained into a
temporary file, the S3 response stream is closed, and the caller reads
the buffer inside a `with` block. Leaving the block closes the buffer,
which deletes it from disk. Nothing survives the request.

Mock mode stores objects in memory, enabling API testing without
provisioning a bucket.
"""

import io
import logging
import shutil
import tempfile
from contextlib import closing, contextmanager
from dataclasses import dataclass
from typing import Any, BinaryIO, ContextManager, Iterator, Optional, Protocol

from ...core.errors import ObjectStoreError

logger = logging.getLogger(__name__)

# Chunk size for draining the S3 response stream into the buffer
COPY_CHUNK_SIZE = 64 * 1024


@dataclass
class StorageConfig:
    """
    Configuration for the S3 client.

    Credentials are not part of this: boto3 resolves them from its
    default chain.
    """
    region: str
    endpoint_url: Optional[str] = None
    connect_timeout: float = 5.0
    read_timeout: float = 60.0
    buffer_dir: Optional[str] = None


class ObjectStore(Protocol):
    """
    Protocol for read-only object storage operations.

    Using a protocol means tests can provide mocks and we can
    swap storage backends without changing dependent code.
    """

    def download(self, bucket: str, key: str) -> ContextManager[BinaryIO]:
        """Fetch an object into a scoped, readable buffer."""
        ...

    def check_bucket(self, bucket: str) -> None:
        """Raise ObjectStoreError if the bucket is not reachable."""
        ...


def build_s3_client(config: StorageConfig) -> Any:
    """
    Create the boto3 S3 client.

    Called once per process. boto3 clients are safe to share between
    threads, so every request uses the same one.

    We import boto3 here (not at module level) because mock mode
    doesn't need it.
    """
    try:
        import boto3
        from botocore.config import Config
    except ImportError:
        raise ImportError(
            "boto3 is required for S3 storage. Install with: pip install boto3"
        )

    boto_config = Config(
        region_name=config.region,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
    )

    client = boto3.client(
        "s3",
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        config=boto_config,
    )

    logger.info(
        "Initialized S3 client",
        extra={
            "region": config.region,
            "endpoint": config.endpoint_url,
        }
    )

    return client


class S3ObjectStore:
    """
    S3 object store.

    Wraps a boto3 client that is built elsewhere and injected, so tests
    can hand in a moto-backed client and production hands in the one
    built at startup.
    """

    def __init__(self, s3_client: Any, buffer_dir: Optional[str] = None) -> None:
        self._s3_client = s3_client
        self._buffer_dir = buffer_dir

    @contextmanager
    def download(self, bucket: str, key: str) -> Iterator[BinaryIO]:
        """
        Download an object into a temporary file and yield it.

        The buffer is positioned at the start of the payload. It is
        closed and removed when the block exits, however it exits.
        """
        buffer = self._fetch_to_buffer(bucket, key)
        with buffer:
            yield buffer

    def _fetch_to_buffer(self, bucket: str, key: str) -> BinaryIO:
        """
        Issue GetObject and drain the body into a fresh temporary file.

        The response stream is closed before returning. Any failure
        along the way becomes ObjectStoreError.
        """
        try:
            response = self._s3_client.get_object(Bucket=bucket, Key=key)
        except Exception as e:
            logger.error(
                "Failed to retrieve object",
                extra={"bucket": bucket, "key": key, "error": str(e)}
            )
            raise ObjectStoreError(f"GetObject failed for s3://{bucket}/{key}: {e}") from e

        with closing(response["Body"]) as body:
            try:
                buffer = tempfile.TemporaryFile(
                    prefix="downloaded_gps_data_",
                    suffix=".json",
                    dir=self._buffer_dir,
                )
            except OSError as e:
                logger.error(
                    "Failed to create download buffer",
                    extra={"buffer_dir": self._buffer_dir, "error": str(e)}
                )
                raise ObjectStoreError(f"Buffer creation failed: {e}") from e

            try:
                shutil.copyfileobj(body, buffer, COPY_CHUNK_SIZE)
                buffer.seek(0)
            except Exception as e:
                buffer.close()
                logger.error(
                    "Failed to read object body",
                    extra={"bucket": bucket, "key": key, "error": str(e)}
                )
                raise ObjectStoreError(f"Transfer failed for s3://{bucket}/{key}: {e}") from e

        logger.debug(
            "Downloaded object",
            extra={
                "bucket": bucket,
                "key": key,
                "size_bytes": response.get("ContentLength"),
            }
        )

        return buffer

    def check_bucket(self, bucket: str) -> None:
        """Verify the bucket exists and we may access it."""
        try:
            self._s3_client.head_bucket(Bucket=bucket)
        except Exception as e:
            logger.error(
                "Bucket check failed",
                extra={"bucket": bucket, "error": str(e)}
            )
            raise ObjectStoreError(f"HeadBucket failed for {bucket}: {e}") from e


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockObjectStore:
    """
    In-memory object store for local development.

    Objects live in a dict keyed by (bucket, key). Buckets exist as soon
    as something is put into them, or when named at construction.

    Not suitable for production, but perfect for development and testing.
    """

    def __init__(self, buckets: tuple[str, ...] = ()) -> None:
        self._objects: dict[tuple[str, str], bytes] = {}
        self._buckets: set[str] = set(buckets)
        logger.info("Initialized mock object store (in-memory)")

    def put_object(self, bucket: str, key: str, data: bytes) -> None:
        """Store an object in memory."""
        self._buckets.add(bucket)
        self._objects[(bucket, key)] = data

        logger.debug(
            "Stored object in mock storage",
            extra={"bucket": bucket, "key": key, "size_bytes": len(data)}
        )

    @contextmanager
    def download(self, bucket: str, key: str) -> Iterator[BinaryIO]:
        """Yield the stored bytes as a readable buffer."""
        if (bucket, key) not in self._objects:
            logger.error(
                "Failed to retrieve object",
                extra={"bucket": bucket, "key": key, "error": "NoSuchKey"}
            )
            raise ObjectStoreError(f"Object not found: s3://{bucket}/{key}")

        with io.BytesIO(self._objects[(bucket, key)]) as buffer:
            yield buffer

    def check_bucket(self, bucket: str) -> None:
        if bucket not in self._buckets:
            raise ObjectStoreError(f"Bucket not found: {bucket}")


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_object_store(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
    mock_buckets: tuple[str, ...] = (),
) -> ObjectStore:
    """
    Create object store based on configuration.

    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, return in-memory store for testing
        mock_buckets: Buckets the mock store starts out with

    Returns:
        ObjectStore implementation (S3 or Mock)
    """
    if mock_mode:
        return MockObjectStore(buckets=mock_buckets)

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return S3ObjectStore(build_s3_client(config), buffer_dir=config.buffer_dir)
