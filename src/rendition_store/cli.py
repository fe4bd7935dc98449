"""
Command line access to the rendition store.

Run:
    rendition-store write photo.jpg --image-id 42
    rendition-store write photo.jpg --image-id 42 --style thumb --option "-resize 25%"
    rendition-store read 42_<digest>_original.jpg --output copy.jpg
    rendition-store remove 42_<digest>_original.jpg

Settings come from the environment (see RenditionConfig.from_env).
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from aws_lambda_powertools import Logger

from rendition_store.core.models.errors import RenditionServiceError
from rendition_store.core.utils.config import RenditionConfig
from rendition_store.core.utils.constants import ORIGINAL_STYLE
from rendition_store.core.utils.mime import content_type_for_extension
from rendition_store.services.ingest_service import IngestService

logger = Logger(UTC=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rendition-store",
        description="Store, fetch and delete image renditions",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    write = commands.add_parser("write", help="Store a rendition of an image file")
    write.add_argument("path", type=Path, help="Image file to upload")
    write.add_argument("--image-id", required=True, help="Logical identifier")
    write.add_argument("--key", default=None, help="Explicit storage key")
    write.add_argument("--style", default=ORIGINAL_STYLE, help="Rendition style name")
    write.add_argument(
        "--option",
        dest="options",
        action="append",
        default=[],
        help="Converter option, repeatable (e.g. --option '-resize 25%%')",
    )
    write.add_argument(
        "--content-type",
        default=None,
        help="MIME type; guessed from the file extension when omitted",
    )

    read = commands.add_parser("read", help="Fetch a stored rendition")
    read.add_argument("key", help="Storage key")
    read.add_argument("--output", type=Path, required=True, help="Destination file")

    remove = commands.add_parser("remove", help="Delete a stored rendition")
    remove.add_argument("key", help="Storage key")

    return parser


def run(args: argparse.Namespace, service: IngestService) -> None:
    if args.command == "write":
        content_type = args.content_type or content_type_for_extension(args.path.suffix)
        with open(args.path, "rb") as f:
            result = service.write(
                file=f,
                image_id=args.image_id,
                key=args.key,
                style_name=args.style,
                convert_options=args.options,
                content_type=content_type,
            )
        print(json.dumps(result.model_dump(mode="json")))

    elif args.command == "read":
        args.output.write_bytes(service.read(args.key))
        logger.info("Rendition saved", extra={"key": args.key, "path": str(args.output)})

    elif args.command == "remove":
        service.remove(args.key)
        logger.info("Rendition removed", extra={"key": args.key})


def main(argv: Sequence[str] | None = None, service: IngestService | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        run(args, service or IngestService(RenditionConfig.from_env()))
    except RenditionServiceError as exc:
        logger.error(
            "Command failed",
            extra={
                "command": args.command,
                "error": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )
        return 1
    except OSError as exc:
        logger.error(
            "Command failed",
            extra={
                "command": args.command,
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
