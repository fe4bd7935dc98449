"""Rekognition-backed implementation of VisionRepository.

Vision enrichment is optional: every collaborator failure is translated to
``VisionServiceError`` and then absorbed here, so callers only ever see
lists.
"""

from collections.abc import Callable, Mapping
from typing import TypeVar

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from rendition_store.core.infrastructure.adapters.rekognition_adapter import (
    RekognitionAdapterProtocol,
)
from rendition_store.core.models.errors import VisionServiceError
from rendition_store.core.models.rendition import FaceBoundingBox, Label
from rendition_store.core.repositories.vision_repository import VisionRepository
from rendition_store.core.utils.constants import (
    VISION_FACE_ATTRIBUTES,
    VISION_MAX_LABELS,
    VISION_MIN_CONFIDENCE,
)

logger = Logger(UTC=True)

ResultT = TypeVar("ResultT")


class RekognitionVision(VisionRepository):
    """Label and face detection through Amazon Rekognition."""

    def __init__(self, adapter: RekognitionAdapterProtocol) -> None:
        self._rekognition = adapter

    def detect_labels(self, image: bytes) -> list[Label]:
        entries = self._absorb(
            "detect_labels",
            lambda: self._rekognition.detect_labels(
                image=image,
                max_labels=VISION_MAX_LABELS,
                min_confidence=VISION_MIN_CONFIDENCE,
            ),
        )
        labels = [Label.from_rekognition(entry) for entry in entries if entry.get("Name")]

        logger.debug("Labels detected", extra={"count": len(labels)})
        return labels

    def detect_faces(self, image: bytes) -> list[FaceBoundingBox]:
        details = self._absorb(
            "detect_faces",
            lambda: self._rekognition.detect_faces(
                image=image,
                attributes=VISION_FACE_ATTRIBUTES,
            ),
        )
        boxes = [
            FaceBoundingBox.from_rekognition(detail["BoundingBox"])
            for detail in details
            if isinstance(detail.get("BoundingBox"), Mapping)
        ]

        logger.debug("Faces detected", extra={"count": len(boxes)})
        return boxes

    def _absorb(
        self,
        operation: str,
        call: Callable[[], list[ResultT]],
    ) -> list[ResultT]:
        """Run a Rekognition call, turning any failure into an empty result."""
        try:
            return self._invoke(operation, call)
        except VisionServiceError as exc:
            logger.warning(
                "Vision service unavailable, continuing without results",
                extra={"operation": operation, **exc.details},
            )
            return []

    @staticmethod
    def _invoke(operation: str, call: Callable[[], list[ResultT]]) -> list[ResultT]:
        try:
            return call()
        except ClientError as exc:
            raise VisionServiceError(
                message="Rekognition request failed",
                details={
                    "error_type": type(exc).__name__,
                    "aws_error_code": exc.response.get("Error", {}).get("Code"),
                },
            ) from exc
        except BotoCoreError as exc:
            # NoRegionError and connection failures land here.
            raise VisionServiceError(
                message="Rekognition is not reachable",
                details={"error_type": type(exc).__name__, "error": str(exc)},
            ) from exc
