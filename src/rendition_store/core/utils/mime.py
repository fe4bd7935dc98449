from collections.abc import Mapping

from rendition_store.core.models.errors import MIMETypeError
from rendition_store.core.utils.constants import (
    EXTENSION_MIME_TYPE_MAP,
    MIME_TYPE_EXTENSION_MAP,
)


def normalize_content_type(content_type: str) -> str:
    """Strip parameters (``; charset=...``) and lowercase a MIME type."""
    return content_type.split(";", 1)[0].strip().lower()


def extension_for_content_type(content_type: str) -> str:
    """Return the canonical dotted extension for a MIME type.

    Raises:
        MIMETypeError: If the MIME type has no known extension
    """
    mime_map: Mapping[str, tuple[str, ...]] = MIME_TYPE_EXTENSION_MAP
    extensions = mime_map.get(normalize_content_type(content_type))

    if not extensions:
        raise MIMETypeError(
            message=f"Unsupported content type '{content_type}'",
            details={
                "content_type": content_type,
                "allowed": sorted(MIME_TYPE_EXTENSION_MAP),
            },
        )

    return f".{extensions[0]}"


def content_type_for_extension(extension: str) -> str:
    """Return the MIME type registered for an extension (with or without dot).

    Raises:
        MIMETypeError: If the extension is unknown
    """
    mime = EXTENSION_MIME_TYPE_MAP.get(extension.lstrip(".").lower())

    if mime is None:
        raise MIMETypeError(
            message=f"Unsupported file extension '{extension}'",
            details={"extension": extension},
        )

    return mime
