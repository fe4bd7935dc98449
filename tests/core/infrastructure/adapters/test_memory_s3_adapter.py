import pytest
from botocore.exceptions import ClientError

from rendition_store.core.infrastructure.adapters.memory_s3_adapter import (
    InMemoryS3Adapter,
)


class TestInMemoryS3Adapter:
    def test_put_and_get_object(self, memory_adapter) -> None:
        memory_adapter.put_object(key="a.jpg", body=b"data", content_type="image/jpeg")

        response = memory_adapter.get_object(key="a.jpg")

        assert response["Body"].read() == b"data"
        assert response["ContentType"] == "image/jpeg"
        assert response["ContentLength"] == 4

    def test_get_missing_key_raises_no_such_key(self, memory_adapter) -> None:
        with pytest.raises(ClientError) as exc:
            memory_adapter.get_object(key="missing.jpg")

        assert exc.value.response["Error"]["Code"] == "NoSuchKey"

    def test_delete_object(self, memory_adapter) -> None:
        memory_adapter.put_object(key="a.jpg", body=b"data", content_type="image/jpeg")

        memory_adapter.delete_object(key="a.jpg")

        with pytest.raises(ClientError):
            memory_adapter.get_object(key="a.jpg")

    def test_delete_missing_key_is_silent(self, memory_adapter) -> None:
        memory_adapter.delete_object(key="never-stored.jpg")

    def test_bucket_name(self) -> None:
        assert InMemoryS3Adapter("uploads").bucket == "uploads"
