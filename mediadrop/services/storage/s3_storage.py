import logging
import re
import time
import uuid
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from mediadrop.core.errors import StorageOperationError, StorageUnconfiguredError
from mediadrop.services.storage.interfaces import ObjectStorage, StoredObject

logger = logging.getLogger(__name__)


class StorageConfig:
    """Immutable configuration object"""
    REQUIRED = {
        "region": "AWS_REGION",
        "access_key": "AWS_ACCESS_KEY_ID",
        "secret_key": "AWS_SECRET_ACCESS_KEY",
        "bucket": "AWS_BUCKET_NAME",
    }

    def __init__(self, region: str, access_key: str, secret_key: str, bucket: str,
                 endpoint_url: Optional[str] = None, cdn_domain: Optional[str] = None,
                 key_prefix: str = ""):
        self.region = region
        self.access_key = access_key
        self.secret_key = secret_key
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.cdn_domain = cdn_domain
        self.key_prefix = key_prefix

    @property
    def missing(self) -> List[str]:
        """Environment variable names of the required values that are empty"""
        return [env for attr, env in self.REQUIRED.items() if not getattr(self, attr)]

    @property
    def is_complete(self) -> bool:
        return not self.missing


def safe_object_name(name: str) -> str:
    """Strip directory components and whitespace from a client-supplied file name"""
    base = PurePosixPath(name.replace("\\", "/")).name
    return re.sub(r"\s+", "_", base.strip()) or "upload"


def make_object_key(name: str, prefix: str = "") -> str:
    """<prefix><epoch millis>-<random hex>-<safe name>"""
    millis = int(time.time() * 1000)
    return f"{prefix}{millis}-{uuid.uuid4().hex[:12]}-{safe_object_name(name)}"


def name_from_key(key: str, prefix: str = "") -> str:
    """Recover the original file name from a key built by make_object_key"""
    if prefix and key.startswith(prefix):
        key = key[len(prefix):]
    parts = key.split("-", 2)
    return parts[2] if len(parts) == 3 else key


class S3Storage(ObjectStorage):
    """S3 (and S3-compatible) bucket implementation"""
    def __init__(self, config: StorageConfig):
        self.config = config
        self.bucket_name = config.bucket
        self.boto_client = None

        if not config.is_complete:
            logger.warning(
                "S3 storage is not properly configured. Missing environment variables: %s",
                ", ".join(config.missing),
            )
            return

        self.boto_client = boto3.client(
            's3',
            endpoint_url=config.endpoint_url,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            config=Config(
                region_name=config.region,
                signature_version='s3v4'
            )
        )

    @property
    def is_configured(self) -> bool:
        return self.boto_client is not None

    def _check_configuration(self) -> None:
        if self.boto_client is None:
            raise StorageUnconfiguredError(
                f"missing settings: {', '.join(self.config.missing)}"
            )

    def store(self, data: bytes, name: str, content_type: str) -> str:
        self._check_configuration()
        object_key = make_object_key(name, self.config.key_prefix)
        try:
            self.boto_client.put_object(
                Bucket=self.bucket_name,
                Key=object_key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Upload failed for %s: %s", object_key, e)
            raise StorageOperationError(f"put_object failed for {object_key}") from e

        logger.info("Stored %s (%d bytes, %s)", object_key, len(data), content_type)
        return object_key

    def delete(self, key: str) -> None:
        self._check_configuration()
        try:
            self.boto_client.delete_object(
                Bucket=self.bucket_name,
                Key=key
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to delete %s: %s", key, e)
            raise StorageOperationError(f"delete_object failed for {key}") from e
        logger.info("Deleted %s", key)

    def list_objects(self) -> List[StoredObject]:
        self._check_configuration()
        prefix = self.config.key_prefix
        objects = []
        try:
            paginator = self.boto_client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                for item in page.get('Contents', []):
                    objects.append(StoredObject(
                        key=item['Key'],
                        name=name_from_key(item['Key'], prefix),
                        last_modified=item.get('LastModified') or datetime.now(timezone.utc),
                        size=item.get('Size', 0),
                    ))
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to list objects in %s: %s", self.bucket_name, e)
            raise StorageOperationError("list_objects_v2 failed") from e

        objects.sort(key=lambda o: o.last_modified, reverse=True)
        return objects

    def signed_url(self, key: str, ttl_seconds: int = 3600) -> str:
        self._check_configuration()
        try:
            return self.boto_client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': key},
                ExpiresIn=ttl_seconds,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Error generating signed URL for %s: %s", key, e)
            raise StorageOperationError(f"presign failed for {key}") from e

    def public_url(self, key: str) -> Optional[str]:
        if not self.config.cdn_domain:
            return None
        return f"https://{self.config.cdn_domain.rstrip('/')}/{key}"
