"""Global constants used throughout the rendition store.

This module centralizes the error codes, MIME table, converter options and
environment variable names shared across modules.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_OBJECT_UPLOAD_FAILED = "OBJECT_UPLOAD_FAILED"
ERROR_CODE_OBJECT_DOWNLOAD_FAILED = "OBJECT_DOWNLOAD_FAILED"
ERROR_CODE_OBJECT_DELETE_FAILED = "OBJECT_DELETE_FAILED"

# Transcoding Errors
ERROR_CODE_TRANSCODE_FAILED = "TRANSCODE_FAILED"
ERROR_CODE_TRANSCODE_TIMEOUT = "TRANSCODE_TIMEOUT"

# Vision Errors
ERROR_CODE_VISION_SERVICE = "VISION_SERVICE_ERROR"


# ============================================================================
# MIME Types
# ============================================================================

# First extension of each entry is the canonical one used in storage keys.
MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg", "jpe"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
    "image/svg+xml": ("svg", "svgz"),
    "image/tiff": ("tiff", "tif"),
    "image/bmp": ("bmp",),
    "image/x-icon": ("ico",),
    "image/heic": ("heic",),
    "image/avif": ("avif",),
}

EXTENSION_MIME_TYPE_MAP: Final[dict[str, str]] = {
    ext: mime
    for mime, extensions in MIME_TYPE_EXTENSION_MAP.items()
    for ext in extensions
}

GIF_MIME_TYPE = "image/gif"


# ============================================================================
# Renditions
# ============================================================================

ORIGINAL_STYLE = "original"

JPEG_OUTPUT_FORMAT = "jpeg"
GIF_OUTPUT_FORMAT = "gif"

GIF_STABILIZATION_OPTIONS: Final[tuple[str, ...]] = (
    "-coalesce",
    "-repage 0x0",
    "+repage",
)
CROP_OPTION = "-crop"
CROP_REPAGE_SUFFIX = " +repage"

# Small enough for the vision service payload limit, good enough to classify.
REFERENCE_RENDITION_OPTIONS: Final[tuple[str, ...]] = ("-quality 10",)

DEFAULT_CONVERT_BINARY = "convert"
DEFAULT_TRANSCODE_TIMEOUT = 10.0
NO_OUTPUT_MESSAGE = "No output received."


# ============================================================================
# Vision
# ============================================================================

VISION_MAX_LABELS = 123
VISION_MIN_CONFIDENCE = 73
VISION_FACE_ATTRIBUTES: Final[tuple[str, ...]] = ("ALL",)


# ============================================================================
# Environment
# ============================================================================

TEST_ENVIRONMENT = "test"
DEFAULT_ENVIRONMENT = "production"

ENV_ENVIRONMENT = "ENVIRONMENT"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_S3_BUCKET_NAME = "RENDITION_S3_BUCKET_NAME"
ENV_PREFIX = "RENDITION_"
