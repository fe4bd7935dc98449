"""Pillow-backed implementation of MetadataExtractorRepository."""

import io
from typing import Any

from aws_lambda_powertools import Logger
from PIL import ExifTags, Image, UnidentifiedImageError

from rendition_store.core.repositories.metadata_repository import (
    MetadataExtractorRepository,
)

logger = Logger(UTC=True)

_IFD_POINTERS = frozenset(ifd.value for ifd in ExifTags.IFD)


def _tag_value(value: Any) -> str:
    """Render an EXIF value as text, dropping characters that are not UTF-8."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore").replace("\x00", "").strip()
    if isinstance(value, tuple):
        return " ".join(_tag_value(item) for item in value)
    return str(value).replace("\x00", "").strip()


class PillowMetadataExtractor(MetadataExtractorRepository):
    """Reads file properties and EXIF tags with Pillow."""

    def extract(self, data: bytes) -> dict[str, str]:
        try:
            with Image.open(io.BytesIO(data)) as image:
                tags: dict[str, str] = {
                    "FileType": image.format or "",
                    "MIMEType": image.get_format_mimetype() or "",
                    "ImageWidth": str(image.width),
                    "ImageHeight": str(image.height),
                }

                exif = image.getexif()
                ifds = [exif, exif.get_ifd(ExifTags.IFD.Exif)]
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            logger.warning(
                "Unable to read image metadata",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )
            return {}

        for ifd in ifds:
            for tag_id, value in ifd.items():
                name = ExifTags.TAGS.get(tag_id)
                # Nested IFD pointers are expanded separately above.
                if name is None or tag_id in _IFD_POINTERS:
                    continue
                tags[name] = _tag_value(value)

        logger.debug("Metadata extracted", extra={"tag_count": len(tags)})
        return tags
