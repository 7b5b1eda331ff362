from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from onboarding.core.config import Settings
from onboarding.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class Storage:
    bucket: str

    def put_bytes(self, key: str, data: bytes, *, content_type: str | None = None) -> None:
        raise NotImplementedError

    def public_url(self, key: str) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class LocalStorage(Storage):
    root: Path
    bucket: str
    base_url: str = "/files"

    def _path(self, key: str) -> Path:
        safe_key = key.lstrip("/").replace("\\", "/")
        return self.root / self.bucket / safe_key

    def put_bytes(self, key: str, data: bytes, *, content_type: str | None = None) -> None:
        p = self._path(key)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(data)
        except OSError as e:
            raise StorageError("Failed to upload file", details=str(e)) from e

    def public_url(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{self.bucket}/{key}"


@dataclass(frozen=True)
class S3Storage(Storage):
    endpoint: str
    region: str
    bucket: str
    access_key_id: str
    secret_access_key: str
    base_url: str = ""

    @cached_property
    def client(self):
        return boto3.client(
            "s3",
            endpoint_url=f"https://{self.endpoint}" if self.endpoint else None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
        )

    def put_bytes(self, key: str, data: bytes, *, content_type: str | None = None) -> None:
        extra: dict[str, object] = {"ACL": "public-read"}
        if content_type:
            extra["ContentType"] = content_type
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, **extra)
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 upload failed for %s/%s: %s", self.bucket, key, e)
            raise StorageError("Failed to upload file", details=str(e)) from e

    def public_url(self, key: str) -> str:
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{self.bucket}/{key}"
        if self.endpoint:
            return f"https://{self.endpoint}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"


def storage_from_settings(config: Settings) -> Storage:
    backend = (config.STORAGE_BACKEND or "local").strip().lower()
    if backend == "s3":
        return S3Storage(
            endpoint=config.S3_ENDPOINT.strip(),
            region=config.S3_REGION.strip(),
            bucket=config.STORAGE_BUCKET.strip(),
            access_key_id=config.S3_ACCESS_KEY_ID.strip(),
            secret_access_key=config.S3_SECRET_ACCESS_KEY.strip(),
            base_url=config.STORAGE_PUBLIC_URL.strip(),
        )
    # default local
    return LocalStorage(
        root=Path(config.STORAGE_LOCAL_ROOT),
        bucket=config.STORAGE_BUCKET.strip(),
        base_url=config.STORAGE_PUBLIC_URL.strip() or "/files",
    )
