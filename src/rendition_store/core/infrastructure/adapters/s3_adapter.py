"""Thin adapter for interacting with Amazon S3 or an S3-compatible endpoint."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3
from botocore.config import Config

from rendition_store.core.models.errors import ConfigurationError
from rendition_store.core.utils.config import RenditionConfig


class _Boto3S3Client(Protocol):
    """The slice of the boto3 S3 client this adapter calls."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
    ) -> Any: ...

    def get_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """What S3ObjectStore needs from an adapter; InMemoryS3Adapter satisfies it too."""

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None: ...

    def get_object(self, *, key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, key: str) -> None: ...


def build_client_kwargs(
    *,
    region: str | None,
    access_key_id: str | None,
    secret_access_key: str | None,
    endpoint: str | None = None,
) -> dict[str, Any]:
    """Collect boto3 client arguments, leaving unset ones to botocore's chain."""
    kwargs: dict[str, Any] = {
        "region_name": region,
        "endpoint_url": endpoint,
        "aws_access_key_id": access_key_id,
        "aws_secret_access_key": secret_access_key,
    }
    return {name: value for name, value in kwargs.items() if value is not None}


class S3Adapter:
    """boto3 calls against a single bucket.

    botocore errors propagate unchanged; S3ObjectStore translates them.
    """

    def __init__(self, config: RenditionConfig) -> None:
        """Build the client; raises ConfigurationError without a bucket."""
        if not config.s3_bucket:
            raise ConfigurationError(
                message="An S3 bucket name is required",
                details={"setting": "s3_bucket"},
            )

        client_config: dict[str, Any] = {
            "s3": {"addressing_style": "path" if config.s3_force_path_style else "auto"},
        }
        if config.s3_signature_version:
            client_config["signature_version"] = config.s3_signature_version

        self._bucket = config.s3_bucket
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            config=Config(**client_config),
            **build_client_kwargs(
                region=config.s3_region,
                endpoint=config.s3_endpoint,
                access_key_id=config.s3_access_key_id,
                secret_access_key=config.s3_secret_access_key,
            ),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Upload bytes under a key in the configured bucket."""
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def get_object(self, *, key: str) -> Mapping[str, Any]:
        """Raw GetObject response; the body is left unread."""
        return self._client.get_object(Bucket=self._bucket, Key=key)

    def delete_object(self, *, key: str) -> None:
        self._client.delete_object(Bucket=self._bucket, Key=key)
