"""
Object storage integration for GPS data documents.

Supports S3 and S3-compatible stores via boto3.
Includes mock mode for local development without credentials.
"""

from .client import (
    MockObjectStore,
    ObjectStore,
    S3ObjectStore,
    StorageConfig,
    build_s3_client,
    create_object_store,
)

__all__ = [
    "MockObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "StorageConfig",
    "build_s3_client",
    "create_object_store",
]
