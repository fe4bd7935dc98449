"""ImageMagick-backed implementation of TranscoderRepository."""

import shlex
import subprocess
from collections.abc import Sequence

from aws_lambda_powertools import Logger

from rendition_store.core.models.errors import TranscodeError
from rendition_store.core.repositories.transcoder_repository import (
    TranscoderRepository,
)
from rendition_store.core.utils.constants import (
    DEFAULT_CONVERT_BINARY,
    DEFAULT_TRANSCODE_TIMEOUT,
    ERROR_CODE_TRANSCODE_TIMEOUT,
    NO_OUTPUT_MESSAGE,
)

logger = Logger(UTC=True)


def build_command(
    binary: str,
    options: Sequence[str],
    output_format: str,
) -> list[str]:
    """Build the converter argv: read stdin, write ``format:`` to stdout.

    Option strings may hold several tokens ("-resize 25%").
    """
    tokens = [token for option in options for token in shlex.split(option)]
    return [binary, "-", *tokens, f"{output_format}:-"]


class ImageMagickTranscoder(TranscoderRepository):
    """Runs ImageMagick's ``convert`` as a pipe, one process per call."""

    def __init__(
        self,
        *,
        binary: str = DEFAULT_CONVERT_BINARY,
        timeout: float = DEFAULT_TRANSCODE_TIMEOUT,
    ) -> None:
        self._binary = binary
        self._timeout = timeout

    def convert(
        self,
        data: bytes,
        options: Sequence[str],
        output_format: str,
    ) -> bytes:
        try:
            command = build_command(self._binary, options, output_format)
        except ValueError as exc:
            raise TranscodeError(
                message=f"Invalid converter option: {exc}",
                details={"options": list(options)},
            ) from exc

        logger.debug(
            "Running converter",
            extra={"command": command, "size": len(data)},
        )

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            logger.error("Converter could not be started", extra={"binary": self._binary})
            raise TranscodeError(
                message=f"Unable to start converter '{self._binary}': {exc}",
                details={"binary": self._binary},
            ) from exc

        try:
            # communicate() drains stdout and stderr together, so neither pipe fills up.
            output, error = process.communicate(input=data, timeout=self._timeout)
        except subprocess.TimeoutExpired as exc:
            logger.error(
                "Converter timed out",
                extra={"timeout": self._timeout, "command": command},
            )
            raise TranscodeError(
                message=f"Converter timed out after {self._timeout:g} seconds",
                error_code=ERROR_CODE_TRANSCODE_TIMEOUT,
                details={"timeout": self._timeout},
            ) from exc
        except BrokenPipeError as exc:
            logger.error("Converter closed its input early", extra={"command": command})
            raise TranscodeError(
                message=str(exc) or "Broken pipe",
                details={"command": command},
            ) from exc
        finally:
            self._terminate(process)

        if error:
            diagnostic = error.decode("utf-8", errors="replace")
            logger.error(
                "Converter reported an error",
                extra={"command": command, "error": diagnostic},
            )
            raise TranscodeError(
                message=diagnostic,
                details={"command": command, "returncode": process.returncode},
            )

        if not output:
            logger.error("Converter produced no output", extra={"command": command})
            raise TranscodeError(
                message=NO_OUTPUT_MESSAGE,
                details={"command": command, "returncode": process.returncode},
            )

        logger.debug("Converter finished", extra={"size": len(output)})
        return output

    @staticmethod
    def _terminate(process: subprocess.Popen[bytes]) -> None:
        """Kill the converter if it is still running, reap it and close its pipes."""
        try:
            process.kill()
        except ProcessLookupError:
            pass  # already exited
        process.wait()

        for stream in (process.stdin, process.stdout, process.stderr):
            if stream is not None:
                stream.close()
