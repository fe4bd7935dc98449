"""Rendition Store Package."""

from rendition_store.core.models.rendition import GravityAnchor, RenditionResult, UploadRequest
from rendition_store.core.utils.config import RenditionConfig
from rendition_store.services.ingest_service import IngestService

__version__ = "1.0.0"
__description__ = (
    "Content-addressed image renditions on S3 with Rekognition labels and crop gravity"
)

__all__ = [
    "GravityAnchor",
    "IngestService",
    "RenditionConfig",
    "RenditionResult",
    "UploadRequest",
]
