"""Abstract contract for image classification and face detection."""

from abc import ABC, abstractmethod

from rendition_store.core.models.rendition import FaceBoundingBox, Label


class VisionRepository(ABC):
    """Contract for computer-vision enrichment.

    Implementations absorb their own failures: callers always receive a
    list, empty when nothing was found or the service was unreachable.
    """

    @abstractmethod
    def detect_labels(self, image: bytes) -> list[Label]:
        """Return labels detected in the image, or an empty list."""

    @abstractmethod
    def detect_faces(self, image: bytes) -> list[FaceBoundingBox]:
        """Return bounding boxes of detected faces, or an empty list."""
