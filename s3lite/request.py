# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Assembly of signed, ready-to-send requests."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from s3lite.access import Access
from s3lite.errors import InvalidHeaderError
from s3lite.signing import (
    Header,
    authorization_header,
    build_string_to_sign,
    trim_path,
)
from s3lite.types import Bucket


#: RFC 9110 header field name (``token``).
_HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

#: Characters that would split or truncate a header line.
_FORBIDDEN_VALUE_CHARS = frozenset("\r\n\0")

RequestContent = bytes | Iterable[bytes] | None


@dataclass(frozen=True)
class SignedRequest:
    """A fully signed request, independent of any HTTP library.

    Attributes:
        method: HTTP method.
        url: Absolute ``https://`` URL.
        headers: Header pairs in wire order.
        content: Request body: bytes, an iterable of byte chunks, or None.
        content_length: Declared body length, required when *content* is
            an iterable so the body is not sent chunked.
    """

    method: str
    url: str
    headers: tuple[Header, ...]
    content: RequestContent = None
    content_length: int | None = None

    def header(self, name: str) -> str | None:
        """Return the first value of a header (case-insensitive), or None."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None


def _check_header(name: str, value: str) -> Header:
    if not _HEADER_NAME_RE.match(name):
        raise InvalidHeaderError(f"Invalid header name: {name!r}")
    if any(ch in _FORBIDDEN_VALUE_CHARS for ch in value):
        raise InvalidHeaderError(
            f"Header {name!r} has a value containing CR, LF or NUL"
        )
    if not value.isascii():
        raise InvalidHeaderError(f"Header {name!r} has a non-ASCII value")
    return name, value


def prepare_request(
    access: Access,
    method: str,
    bucket: Bucket,
    path: str,
    content_type: str,
    extension_headers: Sequence[Header] = (),
    content: RequestContent = None,
    content_length: int | None = None,
) -> SignedRequest:
    """Stamp, sign and assemble a request.

    The access timestamp is refreshed first, and the same value is used
    in both the signature and the ``Date`` header.  Extension headers are
    signed in sorted order but sent in the order given.

    Args:
        access: Credentials to sign with.
        method: HTTP method.
        bucket: Target bucket.
        path: Object key.
        content_type: Value of the ``Content-Type`` header.
        extension_headers: Additional headers, signed and sent.
        content: Request body.
        content_length: Declared length of *content*.

    Returns:
        The signed request. No network I/O is performed.

    Raises:
        InvalidHeaderError: If a header cannot be put on the wire.
        SigningError: If the signature cannot be computed.
    """
    key = trim_path(path)
    host = bucket.host

    with access.exclusive():
        access.update()
        timestamp = access.timestamp
        string_to_sign = build_string_to_sign(
            method,
            bucket,
            key,
            content_type,
            timestamp,
            extension_headers,
        )
        signature = access.sign(string_to_sign)

    headers = [
        _check_header("Host", host),
        _check_header("Date", timestamp),
        _check_header("Content-Type", content_type),
        _check_header(
            "Authorization", authorization_header(access.key_id, signature)
        ),
    ]
    headers.extend(
        _check_header(name, value) for name, value in extension_headers
    )

    return SignedRequest(
        method=method,
        url=f"https://{host}/{key}",
        headers=tuple(headers),
        content=content,
        content_length=content_length,
    )
