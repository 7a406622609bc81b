"""MinIO object storage for uploaded images.

Handlers call `store_upload`, which spools the multipart file to a
temporary file, pushes it to the bucket under a collision-resistant key
and always removes the temporary copy.
"""
from __future__ import annotations

import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Protocol

from fastapi import UploadFile
from minio import Minio
from minio.error import S3Error
from urllib3.exceptions import HTTPError

from reviewhub.config import get_settings
from reviewhub.exceptions import BadRequestError, FileTooLargeError, StorageError

logger = logging.getLogger(__name__)

MB = 1024 * 1024
COPY_CHUNK_SIZE = 64 * 1024


class ObjectStorageProtocol(Protocol):
    """Anything that can upload a local file under a key and return its URL."""

    def upload(self, key: str, local_path: str | Path, content_type: str | None = None) -> str:
        ...


class ObjectStorage:
    """Uploads files to a single MinIO bucket and returns public URLs."""

    def __init__(
        self,
        client: Minio,
        bucket: str,
        public_base_url: str,
    ):
        self._client = client
        self._bucket = bucket
        self._public_base_url = public_base_url.rstrip("/")
        self._bucket_checked = False

    @classmethod
    def from_settings(cls) -> "ObjectStorage":
        settings = get_settings()
        client = Minio(
            settings.minio_endpoint,
            access_key=settings.minio_access_key,
            secret_key=settings.minio_secret_key,
            secure=settings.minio_secure,
        )
        return cls(client, settings.minio_bucket, settings.minio_public_base_url)

    def _ensure_bucket(self) -> None:
        if self._bucket_checked:
            return
        if not self._client.bucket_exists(self._bucket):
            self._client.make_bucket(self._bucket)
            logger.info("Created bucket %s", self._bucket)
        self._bucket_checked = True

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{self._bucket}/{key}"

    def upload(self, key: str, local_path: str | Path, content_type: str | None = None) -> str:
        try:
            self._ensure_bucket()
            self._client.fput_object(
                self._bucket,
                key,
                str(local_path),
                content_type=content_type or "application/octet-stream",
            )
        except (S3Error, HTTPError, OSError) as exc:
            logger.error("Storage upload of %s failed: %s", key, exc)
            raise StorageError("Error uploading file to storage") from exc

        logger.info("Uploaded %s to bucket %s", key, self._bucket)
        return self.public_url(key)


_storage: ObjectStorage | None = None


def get_object_storage() -> ObjectStorage:
    global _storage
    if _storage is None:
        _storage = ObjectStorage.from_settings()
    return _storage


def build_object_key(filename: str) -> str:
    """`<uuid4>-<basename>`; the basename drops any client-supplied directories."""
    return f"{uuid.uuid4()}-{Path(filename).name}"


def store_upload(upload: UploadFile | None, storage: ObjectStorageProtocol) -> str:
    """Validate an uploaded image, push it to storage and return its URL."""
    settings = get_settings()
    if upload is None or not upload.filename:
        raise BadRequestError("Error getting file")

    extension = Path(upload.filename).suffix.lower()
    if extension not in settings.allowed_image_extensions:
        raise BadRequestError(
            f"Unsupported file type '{extension or upload.filename}'. "
            f"Allowed: {', '.join(settings.allowed_image_extensions)}"
        )

    max_bytes = settings.max_upload_mb * MB
    if upload.size is not None and upload.size > max_bytes:
        raise FileTooLargeError(upload.size / MB, settings.max_upload_mb)

    fd, tmp_name = tempfile.mkstemp(suffix=extension, dir=settings.upload_tmp_dir)
    try:
        written = 0
        with os.fdopen(fd, "wb") as tmp:
            # The declared size may be absent; stop spooling once past the limit
            while True:
                chunk = upload.file.read(COPY_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise FileTooLargeError(written / MB, settings.max_upload_mb)
                tmp.write(chunk)

        key = build_object_key(upload.filename)
        return storage.upload(key, tmp_name, content_type=upload.content_type)
    finally:
        Path(tmp_name).unlink(missing_ok=True)
