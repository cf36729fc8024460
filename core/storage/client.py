"""
S3/MinIO blob storage for consultant avatars.
"""

from typing import Optional
from urllib.parse import unquote, urlparse

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.config import Settings, get_settings
from core.logging import get_logger

logger = get_logger("storage")


class BlobStorageError(Exception):
    """Raised when the blob backend rejects or fails an operation."""

    pass


class BlobStore:
    """
    Avatar storage on an S3-compatible bucket using boto3.

    Objects are addressed by key (e.g. ``consultor7/avatar``) and exposed
    through a public URL of the form ``{public_base}/{bucket}/{key}``.

    Usage:
        store = BlobStore()
        url = store.upload("consultor7/avatar", data, content_type="image/png")
        store.delete(store.key_from_url(url))
    """

    def __init__(self, settings: Optional[Settings] = None, client=None):
        self.settings = settings or get_settings()
        self.bucket = self.settings.s3_bucket_name
        self._client = client
        self._bucket_checked = False

    @property
    def client(self):
        """Create the boto3 client on first use."""
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.settings.s3_endpoint_url,
                aws_access_key_id=self.settings.s3_access_key_id,
                aws_secret_access_key=self.settings.s3_secret_access_key,
                region_name=self.settings.s3_region,
                use_ssl=self.settings.s3_use_ssl,
                config=Config(signature_version="s3v4"),
            )
        return self._client

    @property
    def public_base_url(self) -> str:
        base = self.settings.s3_public_url or self.settings.s3_endpoint_url
        if base:
            return base.rstrip("/")
        return f"https://{self.bucket}.s3.{self.settings.s3_region}.amazonaws.com"

    def url_for(self, key: str) -> str:
        """Public URL for an object key."""
        if not (self.settings.s3_public_url or self.settings.s3_endpoint_url):
            return f"{self.public_base_url}/{key}"
        return f"{self.public_base_url}/{self.bucket}/{key}"

    def key_from_url(self, url: str) -> str:
        """
        Recover the object key from a URL produced by ``url_for``.

        Falls back to the URL path (minus a leading bucket segment) for URLs
        issued under a different base.
        """
        prefix = f"{self.public_base_url}/{self.bucket}/"
        if url.startswith(prefix):
            return unquote(url[len(prefix):])

        path = unquote(urlparse(url).path).lstrip("/")
        bucket_prefix = f"{self.bucket}/"
        if path.startswith(bucket_prefix):
            path = path[len(bucket_prefix):]
        return path

    def ensure_bucket_exists(self) -> None:
        """Create the bucket if missing. Checked once per store instance."""
        if self._bucket_checked:
            return
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code not in ("404", "NoSuchBucket"):
                raise BlobStorageError(f"Erro ao verificar bucket '{self.bucket}': {e}") from e
            try:
                if self.settings.s3_region == "us-east-1" or self.settings.s3_endpoint_url:
                    self.client.create_bucket(Bucket=self.bucket)
                else:
                    self.client.create_bucket(
                        Bucket=self.bucket,
                        CreateBucketConfiguration={"LocationConstraint": self.settings.s3_region},
                    )
                logger.info("bucket_created", bucket=self.bucket)
            except (ClientError, BotoCoreError) as create_error:
                raise BlobStorageError(
                    f"Erro ao criar bucket '{self.bucket}': {create_error}"
                ) from create_error
        except BotoCoreError as e:
            raise BlobStorageError(f"Erro ao verificar bucket '{self.bucket}': {e}") from e
        self._bucket_checked = True

    def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Store bytes under ``key``, replacing any existing object.

        Returns:
            Public URL of the stored object

        Raises:
            BlobStorageError: If the upload fails
        """
        self.ensure_bucket_exists()

        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type

        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, **extra_args)
        except (ClientError, BotoCoreError) as e:
            raise BlobStorageError(f"Erro ao enviar arquivo para o S3: {e}") from e

        logger.info("blob_uploaded", key=key, size=len(data))
        return self.url_for(key)

    def delete(self, key: str) -> None:
        """
        Delete the object stored under ``key``.

        Raises:
            BlobStorageError: If the delete fails
        """
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise BlobStorageError(f"Erro ao excluir arquivo do S3: {e}") from e
        logger.info("blob_deleted", key=key)


__all__ = ["BlobStore", "BlobStorageError"]
