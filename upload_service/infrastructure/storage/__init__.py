"""
Object storage integration for uploaded files.

Supports S3 and S3-compatible endpoints through boto3.
Includes mock mode for local development without credentials.
"""

from .client import (
    MockObjectStore,
    ObjectStore,
    S3ObjectStore,
    StorageConfig,
    StorageError,
    create_object_store,
)

__all__ = [
    "MockObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "StorageConfig",
    "StorageError",
    "create_object_store",
]
