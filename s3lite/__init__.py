# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Minimal S3 client with HMAC-SHA1 request signing.

Signs requests with an access key pair and uploads, downloads or deletes
single objects in a bucket.  The network exchange goes through a small
``Transport`` (``httpx`` by default).
"""

from s3lite.access import Access, LockedAccess, format_timestamp
from s3lite.client import S3Client
from s3lite.errors import (
    InvalidFileError,
    InvalidHeaderError,
    S3Error,
    SigningError,
    UnknownHostError,
)
from s3lite.request import SignedRequest, prepare_request
from s3lite.signing import build_string_to_sign
from s3lite.transport import (
    HttpxTransport,
    Transport,
    TransportError,
    TransportResponse,
)
from s3lite.types import ACL, Bucket, Region


__all__ = [
    # access
    "Access",
    "LockedAccess",
    "format_timestamp",
    # client
    "S3Client",
    # errors
    "S3Error",
    "InvalidFileError",
    "InvalidHeaderError",
    "SigningError",
    "UnknownHostError",
    # request
    "SignedRequest",
    "prepare_request",
    "build_string_to_sign",
    # transport
    "HttpxTransport",
    "Transport",
    "TransportError",
    "TransportResponse",
    # types
    "ACL",
    "Bucket",
    "Region",
]
