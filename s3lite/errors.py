# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Exceptions raised by s3lite operations."""


class S3Error(Exception):
    """Base exception for failed storage operations."""


class InvalidFileError(S3Error):
    """The local file is unusable or the remote exchange did not succeed.

    Raised by uploads for missing, empty or unreadable files (before any
    network call), and by every operation when the transport fails or the
    service answers with a non-2xx status.
    """


class InvalidHeaderError(S3Error):
    """A request header could not be assembled."""


class UnknownHostError(S3Error):
    """Reserved for host resolution failures.

    No operation raises this today; resolution failures surface as
    ``InvalidFileError`` through the transport.
    """


class SigningError(S3Error):
    """The request signature could not be computed."""
