"""In-memory stand-in for the S3 adapter, used when storage is stubbed."""

import io
from collections.abc import Mapping
from typing import Any

from botocore.exceptions import ClientError


class InMemoryS3Adapter:
    """Dict-backed S3 adapter with S3 error semantics.

    Missing keys raise the same ``NoSuchKey`` ClientError as S3, and deleting
    an absent key succeeds silently.
    """

    def __init__(self, bucket: str = "stub") -> None:
        self._bucket = bucket
        self._objects: dict[str, tuple[bytes, str]] = {}

    @property
    def bucket(self) -> str:
        return self._bucket

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        self._objects[key] = (bytes(body), content_type)

    def get_object(self, *, key: str) -> Mapping[str, Any]:
        try:
            body, content_type = self._objects[key]
        except KeyError:
            raise ClientError(
                {
                    "Error": {
                        "Code": "NoSuchKey",
                        "Message": "The specified key does not exist.",
                        "Key": key,
                    }
                },
                "GetObject",
            ) from None

        return {
            "Body": io.BytesIO(body),
            "ContentType": content_type,
            "ContentLength": len(body),
        }

    def delete_object(self, *, key: str) -> None:
        self._objects.pop(key, None)
