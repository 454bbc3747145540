"""
Object storage client for uploaded files.

Talks to S3 (or any S3-compatible endpoint) through boto3. Credentials and
region come from boto3's default chain: environment variables, the shared
credentials/config files, then container or instance metadata.

The client is built once at startup and shared read-only by every request.
boto3 is synchronous, so each call runs in a worker thread to keep the event
loop free for other requests.

Mock mode keeps objects in memory, enabling local runs and API tests
without provisioning a bucket.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Protocol

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when storage operations fail."""
    pass


@dataclass(frozen=True)
class StorageConfig:
    """Where objects live: bucket, region and optional endpoint override."""
    bucket_name: str
    region: str
    endpoint_url: Optional[str] = None


class ObjectStore(Protocol):
    """
    Protocol for the two storage operations the service needs.

    Routes depend on this protocol only, so tests can hand in an
    in-memory or failing store.
    """

    async def put(self, key: str, body: BinaryIO) -> None:
        """Write body as the full content of key, replacing any existing object."""
        ...

    async def list(self, prefix: str) -> list[str]:
        """Return keys starting with prefix (first result page only)."""
        ...


class S3ObjectStore:
    """
    S3 object storage client.

    Objects are written with the ``private`` canned ACL. Listing issues a
    single ListObjectsV2 request, so only the first page (up to 1000 keys)
    is ever returned.
    """

    def __init__(self, config: StorageConfig, s3_client=None) -> None:
        """
        Build the boto3 client, failing fast when region or credentials
        cannot be resolved.

        ``s3_client`` lets tests supply a stand-in for the boto3 client.
        """
        self._config = config

        if s3_client is None:
            s3_client = self._build_client(config)

        self._s3_client = s3_client

        logger.info(
            "Initialized S3 storage client",
            extra={
                "bucket": config.bucket_name,
                "region": config.region,
                "endpoint": config.endpoint_url,
            }
        )

    @staticmethod
    def _build_client(config: StorageConfig):
        session = boto3.session.Session(region_name=config.region or None)

        if not session.region_name:
            raise StorageError("Failed to load AWS configuration: no region configured")

        if session.get_credentials() is None:
            raise StorageError("Failed to load AWS configuration: no credentials found")

        return session.client(
            "s3",
            endpoint_url=config.endpoint_url,
            config=Config(signature_version="s3v4"),
        )

    @property
    def bucket_name(self) -> str:
        return self._config.bucket_name

    async def put(self, key: str, body: BinaryIO) -> None:
        """Upload body to key with a private ACL."""
        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._config.bucket_name,
                Key=key,
                Body=body,
                ACL="private",
            )
        except Exception as e:
            logger.error(
                "Failed to upload object",
                extra={"bucket": self._config.bucket_name, "key": key, "error": str(e)}
            )
            raise StorageError(f"failed to upload to s3: {e}") from e

        logger.info(
            "Uploaded object",
            extra={"bucket": self._config.bucket_name, "key": key}
        )

    async def list(self, prefix: str) -> list[str]:
        """List keys under prefix from a single ListObjectsV2 call."""
        try:
            response = await asyncio.to_thread(
                self._s3_client.list_objects_v2,
                Bucket=self._config.bucket_name,
                Prefix=prefix,
            )
        except Exception as e:
            logger.error(
                "Failed to list objects",
                extra={"bucket": self._config.bucket_name, "prefix": prefix, "error": str(e)}
            )
            raise StorageError(f"failed to list s3 objects: {e}") from e

        keys = [obj["Key"] for obj in response.get("Contents", [])]

        # TODO: follow NextContinuationToken if listings over 1000 keys are needed
        if response.get("IsTruncated"):
            logger.warning(
                "Listing truncated to first page",
                extra={"prefix": prefix, "returned": len(keys)}
            )

        logger.debug(
            "Listed objects",
            extra={"prefix": prefix, "count": len(keys)}
        )

        return keys


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockObjectStore:
    """
    In-memory object store.

    Objects live in a dict keyed by object key. Listing returns keys in
    lexicographic order, matching what S3 does for ListObjectsV2.
    """

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        logger.info("Initialized mock storage client (in-memory)")

    async def put(self, key: str, body: BinaryIO) -> None:
        """Store the full content of body under key."""
        self.objects[key] = body.read()

        logger.debug(
            "Stored object in mock storage",
            extra={"key": key, "size_bytes": len(self.objects[key])}
        )

    async def list(self, prefix: str) -> list[str]:
        """Return stored keys starting with prefix."""
        return sorted(key for key in self.objects if key.startswith(prefix))


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_object_store(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> ObjectStore:
    """
    Create the object store for this process.

    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, return the in-memory store

    Raises:
        StorageError: if S3 region or credentials cannot be resolved
    """
    if mock_mode:
        return MockObjectStore()

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return S3ObjectStore(config)
