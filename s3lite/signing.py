# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Canonical request construction for HMAC-SHA1 ("AWS") signatures.

The service rebuilds the same string from the request it receives and
rejects the request unless the signatures match, so the layout below is
exact.  The string to sign is::

    METHOD
    <empty Content-MD5>
    Content-Type
    Date
    x-ext-a:value        (one line per extension header, sorted)
    /bucket/key

with lines joined by ``\\n`` and no trailing newline.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from s3lite.types import Bucket


Header = tuple[str, str]


def trim_path(path: str) -> str:
    """Strip leading and trailing slashes from an object path.

    Args:
        path: Object key, e.g. ``/photos/cat.png/``.

    Returns:
        The key without surrounding slashes, e.g. ``photos/cat.png``.
    """
    return path.strip("/")


def canonical_resource(bucket: Bucket, path: str) -> str:
    """Build the canonical resource ``/bucket/key``.

    Args:
        bucket: Target bucket.
        path: Object key (surrounding slashes are ignored).

    Returns:
        Canonical resource string.
    """
    return f"/{bucket.name}/{trim_path(path)}"


def sort_headers(headers: Iterable[Header]) -> list[Header]:
    """Order extension headers for signing.

    Sorting is by lower-cased header name and stable, so headers sharing
    a name keep the order they were given in.

    Args:
        headers: ``(name, value)`` pairs.

    Returns:
        Sorted list of pairs (names unchanged).
    """
    return sorted(headers, key=lambda h: h[0].lower())


def canonical_extension_headers(headers: Iterable[Header]) -> str:
    """Render extension headers as they appear in the string to sign.

    Args:
        headers: ``(name, value)`` pairs, in any order.

    Returns:
        One ``\\nname:value`` segment per header, names lower-cased.
    """
    return "".join(
        f"\n{name.lower()}:{value}" for name, value in sort_headers(headers)
    )


def build_string_to_sign(
    method: str,
    bucket: Bucket,
    path: str,
    content_type: str,
    timestamp: str,
    extension_headers: Sequence[Header] = (),
) -> str:
    """Build the canonical string to sign for a request.

    Args:
        method: HTTP method (``GET``, ``PUT``, ``DELETE``).
        bucket: Target bucket.
        path: Object key.
        content_type: Value of the ``Content-Type`` header.
        timestamp: Value of the ``Date`` header.
        extension_headers: Additional headers to sign.

    Returns:
        The string to sign.
    """
    return (
        f"{method}\n\n{content_type}\n{timestamp}"
        f"{canonical_extension_headers(extension_headers)}"
        f"\n{canonical_resource(bucket, path)}"
    )


def authorization_header(key_id: str, signature: str) -> str:
    """Format the ``Authorization`` header value.

    Args:
        key_id: Access key ID.
        signature: Base64 signature of the string to sign.

    Returns:
        ``AWS {key_id}:{signature}``.
    """
    return f"AWS {key_id}:{signature}"
