"""Abstract contract for rendition object storage."""

from abc import ABC, abstractmethod


class ObjectStoreRepository(ABC):
    """Contract for storing and retrieving rendition bytes.

    Implementations could be S3, an S3-compatible endpoint, memory, etc.
    The ingest service depends on this interface, not the implementation.
    """

    @abstractmethod
    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Store bytes under a key.

        Args:
            key: Resolved storage key
            body: Rendition bytes
            content_type: MIME type recorded with the object

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def get_object(self, *, key: str) -> bytes:
        """Return the bytes stored under a key.

        Raises:
            NotFoundError: If no object exists for the key
            StorageError: If the read fails
        """

    @abstractmethod
    def delete_object(self, *, key: str) -> None:
        """Delete the object stored under a key.

        Raises:
            StorageError: If the deletion fails
        """
