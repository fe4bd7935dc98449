"""Abstract contract for image transcoding."""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class TranscoderRepository(ABC):
    """Contract for converting image bytes with converter options."""

    @abstractmethod
    def convert(
        self,
        data: bytes,
        options: Sequence[str],
        output_format: str,
    ) -> bytes:
        """Transform image bytes.

        Args:
            data: Source image bytes
            options: Converter option strings, applied in order
            output_format: Target format, e.g. 'jpeg' or 'gif'

        Returns:
            Converted bytes

        Raises:
            TranscodeError: If conversion fails, times out or yields nothing
        """
