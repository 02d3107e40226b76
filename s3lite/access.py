# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Credentials and request signing.

An ``Access`` holds an access key ID and secret, and the timestamp of the
request currently being signed.  The timestamp is refreshed right before
each request is signed so that the signed value and the ``Date`` header
sent on the wire are identical.

``Access`` is not thread-safe: two operations sharing one instance can
interleave timestamp updates.  Give each thread its own ``Access`` or use
``LockedAccess``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import threading
from contextlib import AbstractContextManager, nullcontext
from datetime import UTC, datetime
from email.utils import format_datetime

from s3lite.errors import SigningError
from s3lite.logging import SecretFilter


def _now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Format a moment as a request date.

    Produces ``Mon, 19 Oct 2026 08:30:00 +0000`` regardless of locale.
    Naive datetimes are taken to be UTC.

    Args:
        moment: The moment to format.

    Returns:
        RFC 1123 date string with a numeric UTC offset.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return format_datetime(moment.astimezone(UTC))


class Access:
    """Access key pair used to sign requests.

    Attributes:
        key_id: Access key ID, sent in the clear in ``Authorization``.
        secret: Secret access key, only ever used as the HMAC key.
        timestamp: Date string of the request being signed.
    """

    def __init__(self, key_id: str, secret: str) -> None:
        self.key_id = key_id
        self.secret = secret
        self.timestamp = ""
        SecretFilter.register_secret(secret)
        self.update()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key_id={self.key_id!r})"

    def update(self) -> None:
        """Set the timestamp to the current time."""
        self.timestamp = format_timestamp(_now())

    def sign(self, message: str) -> str:
        """Sign a message with the secret key.

        Args:
            message: The string to sign.

        Returns:
            Base64-encoded HMAC-SHA1 digest.

        Raises:
            SigningError: If the digest cannot be computed.
        """
        try:
            digest = hmac.new(
                self.secret.encode("utf-8"),
                message.encode("utf-8"),
                hashlib.sha1,
            ).digest()
        except (TypeError, ValueError) as e:
            raise SigningError(f"Cannot compute request signature: {e}") from e
        return base64.b64encode(digest).decode("ascii")

    def exclusive(self) -> AbstractContextManager[object]:
        """Context held while a request is stamped and signed.

        A no-op here; see ``LockedAccess``.
        """
        return nullcontext()


class LockedAccess(Access):
    """``Access`` that can be shared between threads.

    ``exclusive()`` holds a lock, so the timestamp set by one request
    cannot be replaced by another before its headers are built.
    """

    def __init__(self, key_id: str, secret: str) -> None:
        self._lock = threading.RLock()
        super().__init__(key_id, secret)

    def update(self) -> None:
        """Set the timestamp to the current time."""
        with self._lock:
            super().update()

    def exclusive(self) -> AbstractContextManager[object]:
        """Hold the credential lock."""
        return self._lock
