"""S3-backed implementation of ObjectStoreRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from rendition_store.core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from rendition_store.core.models.errors import NotFoundError, StorageError
from rendition_store.core.repositories.storage_repository import ObjectStoreRepository
from rendition_store.core.utils.constants import (
    ERROR_CODE_OBJECT_DELETE_FAILED,
    ERROR_CODE_OBJECT_DOWNLOAD_FAILED,
    ERROR_CODE_OBJECT_UPLOAD_FAILED,
)

logger = Logger(UTC=True)

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _is_missing_key(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES


class S3ObjectStore(ObjectStoreRepository):
    """Rendition storage backed by Amazon S3 (or the in-memory stub)."""

    def __init__(self, adapter: S3AdapterProtocol) -> None:
        self._s3 = adapter

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Upload rendition bytes under the given key."""
        logger.debug(
            "Uploading rendition",
            extra={"key": key, "size": len(body), "content_type": content_type},
        )

        try:
            self._s3.put_object(key=key, body=body, content_type=content_type)
        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise StorageError(
                message="Unable to store rendition",
                error_code=ERROR_CODE_OBJECT_UPLOAD_FAILED,
                details={"key": key},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error uploading rendition")
            raise StorageError(
                message="Unable to store rendition",
                error_code=ERROR_CODE_OBJECT_UPLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Rendition uploaded successfully", extra={"key": key})

    def get_object(self, *, key: str) -> bytes:
        """Download the bytes stored under a key."""
        logger.debug("Downloading rendition", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            body: bytes = response["Body"].read()
        except ClientError as exc:
            if _is_missing_key(exc):
                logger.info("Rendition not found", extra={"key": key})
                raise NotFoundError(
                    message="Rendition not found",
                    details={"key": key},
                ) from exc

            logger.error("S3 download failed", extra={"key": key})
            raise StorageError(
                message="Unable to read rendition",
                error_code=ERROR_CODE_OBJECT_DOWNLOAD_FAILED,
                details={"key": key},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error downloading rendition")
            raise StorageError(
                message="Unable to read rendition",
                error_code=ERROR_CODE_OBJECT_DOWNLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info(
            "Rendition downloaded successfully",
            extra={"key": key, "size": len(body)},
        )
        return body

    def delete_object(self, *, key: str) -> None:
        """Delete the object stored under a key."""
        logger.debug("Deleting rendition", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise StorageError(
                message="Unable to delete rendition",
                error_code=ERROR_CODE_OBJECT_DELETE_FAILED,
                details={"key": key},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error deleting rendition")
            raise StorageError(
                message="Unable to delete rendition",
                error_code=ERROR_CODE_OBJECT_DELETE_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Rendition deleted successfully", extra={"key": key})
