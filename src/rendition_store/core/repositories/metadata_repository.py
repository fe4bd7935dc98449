"""Abstract contract for embedded image metadata extraction."""

from abc import ABC, abstractmethod


class MetadataExtractorRepository(ABC):
    """Contract for reading tags (EXIF and friends) from file bytes."""

    @abstractmethod
    def extract(self, data: bytes) -> dict[str, str]:
        """Return a mapping of tag name to value.

        Args:
            data: Original file bytes

        Returns:
            Tag mapping; empty when the file carries no readable tags
        """
