"""Business logic for rendition ingestion.

This module sequences transcoding, fingerprinting, storage and vision
enrichment for a single upload, and exposes read and delete pass-throughs.
"""

from collections.abc import Sequence
from typing import BinaryIO

from aws_lambda_powertools import Logger

from rendition_store.core.engines.fingerprint import FingerprintEngine
from rendition_store.core.engines.gravity import GravityEngine
from rendition_store.core.engines.rendition_selector import RenditionSelector
from rendition_store.core.infrastructure.adapters.memory_s3_adapter import (
    InMemoryS3Adapter,
)
from rendition_store.core.infrastructure.adapters.rekognition_adapter import (
    RekognitionAdapter,
)
from rendition_store.core.infrastructure.adapters.s3_adapter import S3Adapter
from rendition_store.core.infrastructure.aws.rekognition_vision import RekognitionVision
from rendition_store.core.infrastructure.aws.s3_object_store import S3ObjectStore
from rendition_store.core.infrastructure.imagemagick.transcoder import (
    ImageMagickTranscoder,
)
from rendition_store.core.infrastructure.pillow.metadata_extractor import (
    PillowMetadataExtractor,
)
from rendition_store.core.models.errors import ValidationError
from rendition_store.core.models.rendition import (
    GravityAnchor,
    RenditionResult,
    UploadRequest,
)
from rendition_store.core.repositories.metadata_repository import (
    MetadataExtractorRepository,
)
from rendition_store.core.repositories.storage_repository import ObjectStoreRepository
from rendition_store.core.repositories.transcoder_repository import (
    TranscoderRepository,
)
from rendition_store.core.repositories.vision_repository import VisionRepository
from rendition_store.core.utils.config import RenditionConfig
from rendition_store.core.utils.constants import (
    ORIGINAL_STYLE,
    REFERENCE_RENDITION_OPTIONS,
)

logger = Logger(UTC=True)


class IngestService:
    """Application service responsible for rendition writes.

    This service orchestrates:
    - Transcoding the upload for the requested style
    - Computing fingerprints and the storage key
    - Uploading the rendition to object storage
    - Label and face detection for original uploads
    - Reading embedded metadata from the original file

    Collaborators default to the S3, Rekognition, ImageMagick and Pillow
    implementations built from ``config``; any of them can be injected.
    In stub mode storage is kept in memory and vision is never called.
    """

    def __init__(
        self,
        config: RenditionConfig | None = None,
        *,
        object_store: ObjectStoreRepository | None = None,
        vision: VisionRepository | None = None,
        transcoder: TranscoderRepository | None = None,
        metadata_extractor: MetadataExtractorRepository | None = None,
    ) -> None:
        """Initialize the ingest service with its collaborators."""
        self.config = config or RenditionConfig.from_env()

        self.storage = object_store or self._default_object_store(self.config)
        self.transcoder = transcoder or ImageMagickTranscoder(
            binary=self.config.convert_binary,
            timeout=self.config.transcode_timeout,
        )
        self.metadata = metadata_extractor or PillowMetadataExtractor()

        self.vision: VisionRepository | None = None
        if not self.config.is_stubbed:
            self.vision = vision or RekognitionVision(RekognitionAdapter(self.config))

    @staticmethod
    def _default_object_store(config: RenditionConfig) -> ObjectStoreRepository:
        if config.is_stubbed:
            return S3ObjectStore(InMemoryS3Adapter(config.s3_bucket or "stub"))
        return S3ObjectStore(S3Adapter(config))

    def write(
        self,
        *,
        file: BinaryIO,
        image_id: str,
        content_type: str,
        key: str | None = None,
        style_name: str = ORIGINAL_STYLE,
        convert_options: Sequence[str] | None = None,
    ) -> RenditionResult:
        """Store a rendition of an upload and describe it.

        The write flow is:
        1. Resolve the file extension (unknown content types fail here)
        2. Transcode for the requested style, or pass the bytes through
        3. Fingerprint original and rendered bytes and resolve the key
        4. Upload the rendition
        5. Detect labels and gravity (original style, live mode only)
        6. Read metadata from the original bytes

        Args:
            file: Seekable binary stream with the uploaded content
            image_id: Logical identifier, the prefix of generated keys
            content_type: Declared MIME type of the upload
            key: Explicit storage key, used verbatim
            style_name: Rendition style; "original" stores the upload as-is
            convert_options: Converter options for non-original styles

        Returns:
            Result describing the stored rendition

        Raises:
            ValidationError: If the stream is not seekable or image_id is empty
            MIMETypeError: If the content type has no known extension
            TranscodeError: If the converter fails; nothing is stored
            StorageError: If the upload fails
        """
        options = list(convert_options or [])

        if not image_id:
            raise ValidationError(message="image_id must not be empty")

        if not callable(getattr(file, "seekable", None)) or not file.seekable():
            raise ValidationError(
                message="Upload stream must be seekable",
                details={"image_id": image_id},
            )

        logger.debug(
            "Starting rendition write",
            extra={"image_id": image_id, "style_name": style_name},
        )

        # Step 1: Fail on unknown content types before any external call
        FingerprintEngine.resolve_extension(content_type)

        # Step 2: Transcode or pass through
        output = RenditionSelector.select(
            file,
            style_name=style_name,
            convert_options=options,
            content_type=content_type,
            transcoder=self.transcoder,
        )

        # Step 3: Fingerprint and address
        fingerprint = FingerprintEngine.fingerprint(
            original=file,
            rendered=output,
            image_id=image_id,
            style_name=style_name,
            content_type=content_type,
            key=key,
        )

        # Step 4: Store
        self.storage.put_object(
            key=fingerprint.key,
            body=output,
            content_type=content_type,
        )

        # Step 5: Vision enrichment
        keywords: list[str] = []
        gravity = GravityAnchor.CENTER
        if style_name == ORIGINAL_STYLE and self.vision is not None:
            keywords, gravity = self._describe(file, self.vision)

        # Step 6: Embedded metadata from the original upload
        metadata = self.metadata.extract(FingerprintEngine.read_all(file))

        logger.info(
            "Rendition stored successfully",
            extra={
                "image_id": image_id,
                "key": fingerprint.key,
                "style_name": style_name,
                "gravity": gravity.value,
                "keyword_count": len(keywords),
            },
        )

        return RenditionResult(
            fingerprint=fingerprint.rendered_digest,
            metadata=metadata,
            extension=fingerprint.extension,
            filename=fingerprint.key,
            keywords=keywords,
            gravity=gravity,
        )

    def write_request(self, request: UploadRequest) -> RenditionResult:
        """Store a rendition from a validated upload request."""
        return self.write(
            file=request.file,
            image_id=request.image_id,
            content_type=request.content_type,
            key=request.key,
            style_name=request.style_name,
            convert_options=request.convert_options,
        )

    def _describe(
        self,
        file: BinaryIO,
        vision: VisionRepository,
    ) -> tuple[list[str], GravityAnchor]:
        """Keywords and gravity for an upload.

        A low quality reference is classified instead of the upload itself:
        it is plenty for detection and stays under the vision payload limit.
        """
        reference = RenditionSelector.render(
            file,
            REFERENCE_RENDITION_OPTIONS,
            self.transcoder,
        )

        labels = vision.detect_labels(reference)
        faces = vision.detect_faces(reference)

        keywords = list(dict.fromkeys(label.name for label in labels))
        return keywords, GravityEngine.infer(faces)

    def read(self, key: str) -> bytes:
        """Return the bytes stored under a key.

        Raises:
            NotFoundError: If no object exists for the key
            StorageError: If the read fails
        """
        return self.storage.get_object(key=key)

    def remove(self, key: str) -> None:
        """Delete the object stored under a key.

        Raises:
            StorageError: If the deletion fails
        """
        self.storage.delete_object(key=key)
