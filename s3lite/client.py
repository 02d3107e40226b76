# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Object operations: upload, download and delete.

Each operation signs one request, performs one blocking exchange and
either returns or raises.  Nothing is retried.  Any failed exchange
(transport error or non-2xx status) raises ``InvalidFileError``.

Example:
    access = Access("AKIA...", "secret")
    bucket = Bucket("my-bucket", Region.EU_WEST_1)
    with S3Client() as client:
        client.upload_object(
            Path("cat.png"), "image/png", "photos/cat.png",
            bucket, ACL.PUBLIC_READ, access,
        )
        data = client.download_object(
            "photos/cat.png", "image/png", bucket, access
        )
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from s3lite.access import Access
from s3lite.errors import InvalidFileError
from s3lite.request import SignedRequest, prepare_request
from s3lite.signing import Header
from s3lite.transport import (
    DEFAULT_TIMEOUT_SECONDS,
    HttpxTransport,
    Transport,
    TransportError,
    TransportResponse,
)
from s3lite.types import ACL, Bucket


logger = logging.getLogger(__name__)

#: Bytes read from an upload source per body chunk.
UPLOAD_CHUNK_SIZE = 64 * 1024


def _read_chunks(
    stream: BinaryIO, length: int, chunk_size: int = UPLOAD_CHUNK_SIZE
) -> Iterator[bytes]:
    """Yield exactly *length* bytes from *stream* in chunks.

    Raises:
        InvalidFileError: If the stream ends before *length* bytes.
    """
    remaining = length
    while remaining > 0:
        chunk = stream.read(min(chunk_size, remaining))
        if not chunk:
            raise InvalidFileError(
                f"Stream ended after {length - remaining} of {length} bytes"
            )
        remaining -= len(chunk)
        yield chunk


class S3Client:
    """Executes object operations against S3 buckets.

    The client holds no credentials; each call takes the ``Access`` to
    sign with, so one client can serve several key pairs.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        debug: bool = False,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport to send requests with.  When None, an
                ``HttpxTransport`` is created.
            debug: Enable transport debug logging (created transport only).
            timeout: Request timeout in seconds (created transport only).
        """
        if transport is None:
            transport = HttpxTransport(debug=debug, timeout=timeout)
        self._transport = transport

    def __enter__(self) -> S3Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport."""
        self._transport.close()

    def _execute(self, request: SignedRequest) -> TransportResponse:
        try:
            response = self._transport.perform(request)
        except TransportError as e:
            logger.debug("%s %s: %s", request.method, request.url, e)
            raise InvalidFileError(str(e)) from e

        if not response.ok:
            logger.debug(
                "%s %s: HTTP %d",
                request.method,
                request.url,
                response.status_code,
            )
            raise InvalidFileError(
                f"{request.method} {request.url} returned HTTP "
                f"{response.status_code}"
            )
        return response

    def delete_object(
        self,
        name: str,
        content_type: str,
        bucket: Bucket,
        access: Access,
    ) -> None:
        """Delete an object.

        Args:
            name: Object key.
            content_type: Content type to sign and send.
            bucket: Bucket holding the object.
            access: Credentials to sign with.

        Raises:
            InvalidFileError: If the exchange fails.
        """
        request = prepare_request(access, "DELETE", bucket, name, content_type)
        logger.debug("Deleting %s from %s", name, bucket.name)
        self._execute(request)

    def download_object(
        self,
        name: str,
        content_type: str,
        bucket: Bucket,
        access: Access,
    ) -> bytes:
        """Download an object into memory.

        Args:
            name: Object key.
            content_type: Content type to sign and send.
            bucket: Bucket holding the object.
            access: Credentials to sign with.

        Returns:
            The complete object body.

        Raises:
            InvalidFileError: If the exchange fails.
        """
        request = prepare_request(access, "GET", bucket, name, content_type)
        logger.debug("Downloading %s from %s", name, bucket.name)
        response = self._execute(request)
        return response.body

    def upload_object(
        self,
        file_path: Path | str,
        content_type: str,
        name: str,
        bucket: Bucket,
        acl: ACL,
        access: Access,
    ) -> None:
        """Upload a local file.

        The file is checked and opened before anything is sent, and is
        closed on every exit path.

        Args:
            file_path: Local file to upload.
            content_type: Content type of the object.
            name: Object key.
            bucket: Destination bucket.
            acl: Canned ACL for the new object.
            access: Credentials to sign with.

        Raises:
            InvalidFileError: If the file is missing, empty or unreadable,
                or the exchange fails.
        """
        path = Path(file_path)
        try:
            size = path.stat().st_size
        except OSError as e:
            raise InvalidFileError(f"Cannot stat {path}: {e}") from e
        if size <= 0:
            raise InvalidFileError(f"Refusing to upload empty file {path}")

        try:
            stream = open(path, "rb")
        except OSError as e:
            raise InvalidFileError(f"Cannot open {path}: {e}") from e

        with stream:
            self.upload_stream(
                stream, size, content_type, name, bucket, acl, access
            )

    def upload_stream(
        self,
        stream: BinaryIO,
        length: int,
        content_type: str,
        name: str,
        bucket: Bucket,
        acl: ACL,
        access: Access,
    ) -> None:
        """Upload *length* bytes read from a binary stream.

        The body is read from *stream* in chunks while it is sent, so
        the object never has to fit in memory.  The stream is not closed.

        Args:
            stream: Readable binary stream positioned at the object start.
            length: Exact number of bytes to send.
            content_type: Content type of the object.
            name: Object key.
            bucket: Destination bucket.
            acl: Canned ACL for the new object.
            access: Credentials to sign with.

        Raises:
            InvalidFileError: If *length* is not positive or the exchange
                fails.  Also raised while sending when *stream* ends
                before *length* bytes.
        """
        if length <= 0:
            raise InvalidFileError(f"Refusing to upload {length} bytes")

        extension_headers: list[Header] = []
        if acl.header_value is not None:
            extension_headers.append(("x-amz-acl", acl.header_value))

        request = prepare_request(
            access,
            "PUT",
            bucket,
            name,
            content_type,
            extension_headers,
            content=_read_chunks(stream, length),
            content_length=length,
        )
        logger.debug(
            "Uploading %d bytes to %s in %s", length, name, bucket.name
        )
        self._execute(request)
