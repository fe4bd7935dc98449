"""Client configuration for the rendition store.

Settings load from ``RENDITION_*`` environment variables, plus the shared
``ENVIRONMENT``, ``AWS_REGION`` and ``AWS_ENDPOINT_URL``. Keyword arguments
take precedence over the environment.
"""

from pydantic import Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

from rendition_store.core.utils.constants import (
    DEFAULT_CONVERT_BINARY,
    DEFAULT_ENVIRONMENT,
    DEFAULT_TRANSCODE_TIMEOUT,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_ENVIRONMENT,
    ENV_PREFIX,
    ENV_S3_BUCKET_NAME,
    TEST_ENVIRONMENT,
)


class RenditionConfig(BaseSettings):
    """Settings for the object store, vision service and converter."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(
        DEFAULT_ENVIRONMENT,
        validation_alias=ENV_ENVIRONMENT,
        description="Application environment; 'test' stubs S3 and skips vision calls",
    )

    # Object storage
    s3_bucket: str | None = Field(
        None, validation_alias=ENV_S3_BUCKET_NAME, description="Bucket holding renditions"
    )
    s3_region: str | None = Field(None, validation_alias=ENV_AWS_REGION)
    s3_endpoint: str | None = Field(
        None,
        validation_alias=ENV_AWS_ENDPOINT_URL,
        description="Endpoint for S3-compatible storage",
    )
    s3_force_path_style: bool = True
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_signature_version: str | None = None

    # Vision
    rekognition_region: str | None = None
    rekognition_access_key_id: str | None = None
    rekognition_secret_access_key: str | None = None

    # Converter
    convert_binary: str = DEFAULT_CONVERT_BINARY
    transcode_timeout: PositiveFloat = DEFAULT_TRANSCODE_TIMEOUT

    @property
    def is_stubbed(self) -> bool:
        """True when storage is stubbed and vision calls are skipped."""
        return self.environment == TEST_ENVIRONMENT

    @classmethod
    def from_env(cls) -> "RenditionConfig":
        """Build configuration from the process environment alone."""
        return cls()
