"""
Storage Service Package

Object storage abstraction used by the upload pipeline and the file routes.

Key Components:
- ObjectStorage: Abstract base class for storage backends
- StoredObject: One entry of a bucket listing
- StorageConfig: Explicit connection settings
- S3Storage: boto3 implementation for S3 and S3-compatible buckets
"""

from .interfaces import ObjectStorage, StoredObject
from .s3_storage import S3Storage, StorageConfig, make_object_key, name_from_key

__all__ = [
    # Interfaces
    'ObjectStorage',
    'StoredObject',

    # Implementations
    'StorageConfig',
    'S3Storage',

    # Key naming
    'make_object_key',
    'name_from_key',
]
