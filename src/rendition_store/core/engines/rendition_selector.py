"""Decides whether and how a rendition is transcoded."""

from collections.abc import Sequence
from typing import BinaryIO

from aws_lambda_powertools import Logger

from rendition_store.core.engines.fingerprint import FingerprintEngine
from rendition_store.core.repositories.transcoder_repository import (
    TranscoderRepository,
)
from rendition_store.core.utils.constants import (
    CROP_OPTION,
    CROP_REPAGE_SUFFIX,
    GIF_MIME_TYPE,
    GIF_OUTPUT_FORMAT,
    GIF_STABILIZATION_OPTIONS,
    JPEG_OUTPUT_FORMAT,
    ORIGINAL_STYLE,
)
from rendition_store.core.utils.mime import normalize_content_type

logger = Logger(UTC=True)


class RenditionSelector:
    """
    Chooses between pass-through, the single-frame path and the animated path.

    Typical usage:
    1. ``requires_transcode`` decides whether the converter runs at all
    2. ``is_animated`` picks the GIF path for animated input
    3. ``render`` / ``render_gif`` call the converter with the final options
    """

    @staticmethod
    def requires_transcode(style_name: str, convert_options: Sequence[str]) -> bool:
        return style_name != ORIGINAL_STYLE and bool(convert_options)

    @staticmethod
    def is_animated(content_type: str) -> bool:
        return GIF_MIME_TYPE in normalize_content_type(content_type)

    @staticmethod
    def gif_options(convert_options: Sequence[str]) -> list[str]:
        """
        Options for multi-frame output.

        Crops on a multi-frame image leave a virtual canvas offset behind, so
        every crop option is followed by a repage. The frames are then
        coalesced and their canvases reset.

        Example:
            gif_options(["-crop 10x10+0+0"])

            → ["-crop 10x10+0+0 +repage", "-coalesce", "-repage 0x0", "+repage"]
        """
        options = [
            f"{option}{CROP_REPAGE_SUFFIX}" if CROP_OPTION in option else option
            for option in convert_options
        ]
        options.extend(GIF_STABILIZATION_OPTIONS)
        return options

    @staticmethod
    def render(
        stream: BinaryIO,
        convert_options: Sequence[str],
        transcoder: TranscoderRepository,
    ) -> bytes:
        """Single-frame rendition, emitted as JPEG."""
        return transcoder.convert(
            FingerprintEngine.read_all(stream),
            list(convert_options),
            JPEG_OUTPUT_FORMAT,
        )

    @classmethod
    def render_gif(
        cls,
        stream: BinaryIO,
        convert_options: Sequence[str],
        transcoder: TranscoderRepository,
    ) -> bytes:
        """Animated rendition, emitted as GIF."""
        return transcoder.convert(
            FingerprintEngine.read_all(stream),
            cls.gif_options(convert_options),
            GIF_OUTPUT_FORMAT,
        )

    @classmethod
    def select(
        cls,
        stream: BinaryIO,
        *,
        style_name: str,
        convert_options: Sequence[str],
        content_type: str,
        transcoder: TranscoderRepository,
    ) -> bytes:
        """Return the bytes to store for the requested style."""
        if not cls.requires_transcode(style_name, convert_options):
            logger.debug("Storing input unchanged", extra={"style_name": style_name})
            return FingerprintEngine.read_all(stream)

        if cls.is_animated(content_type):
            logger.debug("Rendering animated rendition", extra={"style_name": style_name})
            return cls.render_gif(stream, convert_options, transcoder)

        logger.debug("Rendering rendition", extra={"style_name": style_name})
        return cls.render(stream, convert_options, transcoder)
