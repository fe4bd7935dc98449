"""Content fingerprints and content-addressed storage keys."""

import hashlib
from typing import BinaryIO

from rendition_store.core.models.rendition import Fingerprint
from rendition_store.core.utils.constants import ORIGINAL_STYLE
from rendition_store.core.utils.mime import extension_for_content_type


class FingerprintEngine:
    """
    Deterministic addressing for renditions.

    The same identifier, original bytes, rendered bytes and style always map
    to the same key, so repeated uploads land on the same object.
    """

    @staticmethod
    def digest(data: bytes) -> str:
        """Hex MD5 digest of the given bytes."""
        return hashlib.md5(data, usedforsecurity=False).hexdigest()

    @staticmethod
    def read_all(stream: BinaryIO) -> bytes:
        """Read a stream from its start, whatever its current position."""
        stream.seek(0)
        return stream.read()

    @staticmethod
    def resolve_extension(content_type: str) -> str:
        """Dotted extension for a MIME type; raises MIMETypeError when unknown."""
        return extension_for_content_type(content_type)

    @staticmethod
    def build_key(
        *,
        image_id: str,
        original_digest: str,
        rendered_digest: str,
        style_name: str,
        extension: str,
        key: str | None = None,
    ) -> str:
        """
        Resolve the storage key of a rendition.

        An explicit key wins. Otherwise the key is
        ``{image_id}_{original_digest}_{token}{extension}`` where the token is
        ``original`` for the original style and the rendered digest for
        every other style.

        Example:
            build_key(image_id="42", original_digest="ab..", rendered_digest="cd..",
                      style_name="thumb", extension=".jpg")

            → "42_ab.._cd...jpg"
        """
        if key:
            return key

        token = ORIGINAL_STYLE if style_name == ORIGINAL_STYLE else rendered_digest
        return f"{image_id}_{original_digest}_{token}{extension}"

    @classmethod
    def fingerprint(
        cls,
        *,
        original: BinaryIO,
        rendered: bytes,
        image_id: str,
        style_name: str,
        content_type: str,
        key: str | None = None,
    ) -> Fingerprint:
        """Digest original and rendered bytes and resolve the storage key."""
        extension = cls.resolve_extension(content_type)
        original_digest = cls.digest(cls.read_all(original))
        rendered_digest = cls.digest(rendered)

        return Fingerprint(
            original_digest=original_digest,
            rendered_digest=rendered_digest,
            key=cls.build_key(
                image_id=image_id,
                original_digest=original_digest,
                rendered_digest=rendered_digest,
                style_name=style_name,
                extension=extension,
                key=key,
            ),
            extension=extension,
        )
