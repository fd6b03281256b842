"""S3-compatible object storage for user uploads."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import boto3.session
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an object cannot be written to the bucket."""


class ObjectStorage:
    def __init__(
        self,
        bucket: Optional[str],
        region: Optional[str] = None,
        endpoint: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        public_base: Optional[str] = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint = endpoint
        self.access_key = access_key
        self.secret_key = secret_key
        self.public_base = public_base
        self._client = None

    @classmethod
    def from_config(cls, config: Mapping) -> "ObjectStorage":
        return cls(
            bucket=config.get("S3_BUCKET"),
            region=config.get("S3_REGION"),
            endpoint=config.get("S3_ENDPOINT"),
            access_key=config.get("S3_ACCESS_KEY_ID"),
            secret_key=config.get("S3_SECRET_ACCESS_KEY"),
            public_base=config.get("S3_PUBLIC_BASE"),
        )

    @property
    def client(self):
        # Created on first use so app start-up never touches the network.
        if self._client is None:
            session = boto3.session.Session()
            self._client = session.client(
                "s3",
                region_name=self.region,
                endpoint_url=self.endpoint,
                aws_access_key_id=self.access_key,
                aws_secret_access_key=self.secret_key,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    def public_url(self, key: str) -> str:
        if self.public_base:
            return f"{self.public_base.rstrip('/')}/{key}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload_bytes(self, data: bytes, key: str, content_type: str) -> str:
        """Upload ``data`` under ``key`` and return its public URL."""
        if not self.bucket:
            raise StorageError("Object storage bucket is not configured")
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ACL="public-read",
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Upload of %s failed: %s", key, exc)
            raise StorageError(str(exc)) from exc
        return self.public_url(key)


def get_storage() -> ObjectStorage:
    return current_app.extensions["storage"]
