#!/usr/bin/env python3
"""
MinIO Object Storage Client

Thin async wrapper over the ``minio`` SDK: upload an object by key and
resolve the public URL it is served from. SDK calls are blocking, so they
run in a worker thread.

Usage:
    from core.minio_client import ObjectStorageClient

    storage = ObjectStorageClient.from_config(infra_config)
    await storage.upload("garments/1700000000000-shirt.png", data, "image/png")
    url = storage.get_public_url("garments/1700000000000-shirt.png")
"""
import asyncio
import logging
from io import BytesIO
from typing import Optional
from urllib.parse import quote

from minio import Minio
from minio.error import S3Error

from .config import InfraConfig

logger = logging.getLogger(__name__)


class ObjectStorageError(Exception):
    """Upload or bucket operation failed"""
    pass


class ObjectStorageClient:
    """MinIO / S3 compatible object storage"""

    def __init__(
        self,
        client: Minio,
        bucket_name: str,
        public_base_url: str,
    ):
        self.client = client
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_config(cls, config: InfraConfig) -> 'ObjectStorageClient':
        client = Minio(
            endpoint=config.minio_endpoint,
            access_key=config.minio_access_key,
            secret_key=config.minio_secret_key,
            secure=config.minio_secure,
        )
        scheme = "https" if config.minio_secure else "http"
        public_base_url = config.minio_public_url or f"{scheme}://{config.minio_endpoint}/{config.minio_bucket}"
        return cls(client=client, bucket_name=config.minio_bucket, public_base_url=public_base_url)

    def ensure_bucket(self):
        """Create the bucket when missing"""
        try:
            if not self.client.bucket_exists(bucket_name=self.bucket_name):
                self.client.make_bucket(bucket_name=self.bucket_name)
                logger.info(f"Created MinIO bucket: {self.bucket_name}")
            else:
                logger.info(f"MinIO bucket exists: {self.bucket_name}")
        except S3Error as e:
            logger.error(f"Error ensuring bucket exists: {e}")
            raise ObjectStorageError(f"Failed to ensure bucket {self.bucket_name}: {e}") from e

    async def upload(self, object_key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Store ``data`` under ``object_key``.

        Returns:
            The object key

        Raises:
            ObjectStorageError: the store rejected the upload
        """
        try:
            await asyncio.to_thread(
                self.client.put_object,
                bucket_name=self.bucket_name,
                object_name=object_key,
                data=BytesIO(data),
                length=len(data),
                content_type=content_type or "application/octet-stream",
            )
        except S3Error as e:
            logger.error(f"Failed to upload {object_key}: {e}")
            raise ObjectStorageError(f"Failed to upload {object_key}: {e}") from e

        logger.debug(f"Uploaded {object_key} ({len(data)} bytes) to {self.bucket_name}")
        return object_key

    def get_public_url(self, object_key: str) -> str:
        """Publicly resolvable URL of an object (bucket must allow anonymous reads)"""
        return f"{self.public_base_url}/{quote(object_key)}"
