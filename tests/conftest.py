"""
Pytest configuration and fixtures for rendition store tests.
Provides collaborator test doubles, moto-backed S3 and sample images.
"""

import io
import os
from collections.abc import Callable, Sequence
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

from rendition_store.core.infrastructure.adapters.memory_s3_adapter import (
    InMemoryS3Adapter,
)
from rendition_store.core.infrastructure.aws.s3_object_store import S3ObjectStore
from rendition_store.core.models.rendition import FaceBoundingBox, Label
from rendition_store.core.repositories.transcoder_repository import (
    TranscoderRepository,
)
from rendition_store.core.repositories.vision_repository import VisionRepository
from rendition_store.core.utils.config import RenditionConfig

TEST_BUCKET = "renditions"
TEST_REGION = "us-east-1"


# ============================================================================
# Collaborator doubles
# ============================================================================


class FakeTranscoder(TranscoderRepository):
    """Records converter calls and returns canned output."""

    def __init__(self, output: bytes = b"rendered-bytes", error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.calls: list[tuple[bytes, list[str], str]] = []

    def convert(self, data: bytes, options: Sequence[str], output_format: str) -> bytes:
        self.calls.append((data, list(options), output_format))
        if self.error:
            raise self.error
        return self.output


class FakeVision(VisionRepository):
    """Returns preset labels and faces, recording the images it was shown."""

    def __init__(
        self,
        labels: list[Label] | None = None,
        faces: list[FaceBoundingBox] | None = None,
    ) -> None:
        self.labels = labels or []
        self.faces = faces or []
        self.images: list[bytes] = []

    def detect_labels(self, image: bytes) -> list[Label]:
        self.images.append(image)
        return list(self.labels)

    def detect_faces(self, image: bytes) -> list[FaceBoundingBox]:
        self.images.append(image)
        return list(self.faces)


@pytest.fixture
def fake_transcoder() -> FakeTranscoder:
    return FakeTranscoder()


@pytest.fixture
def fake_vision() -> FakeVision:
    return FakeVision(
        labels=[Label(name="Person", confidence=99.1), Label(name="Beach", confidence=80.0)],
        faces=[FaceBoundingBox(left=0.1, top=0.1, width=0.2, height=0.2)],
    )


@pytest.fixture
def memory_adapter() -> InMemoryS3Adapter:
    return InMemoryS3Adapter(TEST_BUCKET)


@pytest.fixture
def memory_store(memory_adapter) -> S3ObjectStore:
    return S3ObjectStore(memory_adapter)


# ============================================================================
# Configuration
# ============================================================================

@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep RenditionConfig independent of the developer's shell."""
    for name in list(os.environ):
        if name.upper().startswith("RENDITION_"):
            monkeypatch.delenv(name)
    for name in ("ENVIRONMENT", "AWS_REGION", "AWS_ENDPOINT_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def live_config() -> RenditionConfig:
    """Live-mode settings pointing at the moto region."""
    return RenditionConfig(
        environment="production",
        s3_bucket=TEST_BUCKET,
        s3_region=TEST_REGION,
        s3_access_key_id="testing",
        s3_secret_access_key="testing",
        rekognition_region=TEST_REGION,
    )


@pytest.fixture
def stub_config() -> RenditionConfig:
    return RenditionConfig(environment="test", s3_bucket=TEST_BUCKET)


# ============================================================================
# AWS (moto)
# ============================================================================


@pytest.fixture(scope="function")
def aws_mock(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=TEST_REGION)


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    s3_client.create_bucket(Bucket=TEST_BUCKET)

    yield s3_client

    _cleanup_s3_objects(s3_client, TEST_BUCKET)


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], bytes]:
    """
    Helper to get an object from S3.

    Usage:
        content = s3_get_object("42_abc_original.jpg")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_client.get_object(Bucket=TEST_BUCKET, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_object_count(s3_client) -> Callable[[], int]:
    def _count() -> int:
        response = s3_client.list_objects_v2(Bucket=TEST_BUCKET)
        return int(response.get("KeyCount", 0))

    return _count


# ============================================================================
# Sample images
# ============================================================================


def _encode(image: Image.Image, fmt: str, **params: Any) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **params)
    return buffer.getvalue()


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """16x8 JPEG carrying camera make and model EXIF tags."""
    exif = Image.Exif()
    exif[0x010F] = "Acme"  # Make
    exif[0x0110] = "Model 7"  # Model
    return _encode(Image.new("RGB", (16, 8), "red"), "JPEG", exif=exif)


@pytest.fixture
def sample_png_binary() -> bytes:
    return _encode(Image.new("RGB", (4, 4), "blue"), "PNG")


@pytest.fixture
def oversized_png_binary() -> bytes:
    """1-bit PNG above Pillow's decompression bomb limit; small once encoded."""
    return _encode(Image.new("1", (20000, 10000)), "PNG")


@pytest.fixture
def sample_jpeg_file(sample_jpeg_binary) -> io.BytesIO:
    return io.BytesIO(sample_jpeg_binary)
