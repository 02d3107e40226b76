# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""``s3lite`` command line.

Uploads, downloads and deletes single objects in the bucket named by the
configuration file.

Exit codes: 0 success, 1 configuration error, 2 operation failed.
"""

import argparse
import logging
import mimetypes
import sys
from pathlib import Path

from s3lite.config import ClientConfig, ConfigError
from s3lite.errors import S3Error
from s3lite.logging import configure_logging
from s3lite.types import ACL


logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_OPERATION = 2


def _guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or DEFAULT_CONTENT_TYPE


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3lite",
        description="Upload, download and delete S3 objects",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to s3lite.yaml (default: ~/.config/s3lite/s3lite.yaml)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging, including every HTTP exchange",
    )
    parser.add_argument(
        "--bucket",
        default=None,
        metavar="NAME",
        help="Bucket to use instead of the configured one",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    upload = commands.add_parser("upload", help="Upload a local file")
    upload.add_argument("file", type=Path, help="File to upload")
    upload.add_argument(
        "--name", default=None, help="Object key (default: file name)"
    )
    upload.add_argument(
        "--content-type",
        default=None,
        help="Content type (default: guessed from the file name)",
    )
    upload.add_argument(
        "--public-read",
        action="store_true",
        help="Make the object publicly readable",
    )

    download = commands.add_parser("download", help="Download an object")
    download.add_argument("name", help="Object key")
    download.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Destination file (default: stdout)",
    )
    download.add_argument("--content-type", default=DEFAULT_CONTENT_TYPE)

    delete = commands.add_parser("delete", help="Delete an object")
    delete.add_argument("name", help="Object key")
    delete.add_argument("--content-type", default=DEFAULT_CONTENT_TYPE)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code.
    """
    args = _build_parser().parse_args(argv)

    configure_logging(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        config = ClientConfig.from_yaml(config_path=args.config)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG

    access = config.make_access()
    bucket = config.make_bucket(args.bucket)

    with config.make_client(debug=args.debug) as client:
        try:
            if args.command == "upload":
                name = args.name or args.file.name
                content_type = args.content_type or _guess_content_type(
                    args.file
                )
                acl = ACL.PUBLIC_READ if args.public_read else ACL.DEFAULT
                client.upload_object(
                    args.file, content_type, name, bucket, acl, access
                )
                logger.info(
                    "Uploaded %s to %s/%s", args.file, bucket.name, name
                )
            elif args.command == "download":
                data = client.download_object(
                    args.name, args.content_type, bucket, access
                )
                if args.output is None:
                    sys.stdout.buffer.write(data)
                    sys.stdout.buffer.flush()
                else:
                    args.output.write_bytes(data)
            else:
                client.delete_object(
                    args.name, args.content_type, bucket, access
                )
        except (S3Error, OSError) as e:
            logger.error("%s failed: %s", args.command, e)
            return EXIT_OPERATION

    return EXIT_OK
