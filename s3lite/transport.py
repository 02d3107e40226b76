# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Blocking HTTP transport for signed requests.

The client only needs one thing from the network: send a ``SignedRequest``
and get back the status, headers and the complete body.  ``Transport``
describes that contract; ``HttpxTransport`` implements it on top of
``httpx.Client``.  Tests substitute an ``httpx.MockTransport`` inside the
client rather than replacing this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from s3lite.request import SignedRequest


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class TransportError(Exception):
    """The request could not be exchanged with the server."""


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of a completed exchange.

    Attributes:
        status_code: Final HTTP status code (after redirects).
        headers: Response header pairs.
        body: Complete response body.
    """

    status_code: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Performs one blocking request/response exchange."""

    def perform(self, request: SignedRequest) -> TransportResponse:
        """Send *request* and return the complete response.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...

    def close(self) -> None:
        """Release network resources."""
        ...


class HttpxTransport:
    """``Transport`` backed by ``httpx.Client``.

    Redirects are followed.  With ``debug`` enabled, request lines,
    request headers and response statuses are logged at DEBUG.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        debug: bool = False,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Client to send requests with.  When None, a client is
                created with redirect following and *timeout*.  A client
                passed in is still closed by ``close()``.
            debug: Log each exchange at DEBUG.
            timeout: Timeout in seconds for a created client.
        """
        if client is None:
            client = httpx.Client(follow_redirects=True, timeout=timeout)
        self._client = client
        self.debug = debug
        if debug:
            hooks = client.event_hooks
            hooks["request"] = [*hooks.get("request", []), _log_request]
            hooks["response"] = [*hooks.get("response", []), _log_response]
            client.event_hooks = hooks

    def perform(self, request: SignedRequest) -> TransportResponse:
        """Send a signed request and read the whole response.

        Args:
            request: The request to send.

        Returns:
            The response.

        Raises:
            TransportError: On connection, TLS, timeout or body errors.
        """
        headers = list(request.headers)
        if request.content_length is not None:
            headers.append(("Content-Length", str(request.content_length)))

        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.content,
                follow_redirects=True,
            )
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise TransportError(
                f"{request.method} {request.url} failed: {e}"
            ) from e

        return TransportResponse(
            status_code=response.status_code,
            headers=list(response.headers.multi_items()),
            body=response.content,
        )

    def close(self) -> None:
        """Close the underlying client."""
        self._client.close()


def _log_request(request: httpx.Request) -> None:
    logger.debug("> %s %s", request.method, request.url)
    for name, value in request.headers.multi_items():
        logger.debug("> %s: %s", name, value)


def _log_response(response: httpx.Response) -> None:
    logger.debug(
        "< %s %s (%s %s)",
        response.status_code,
        response.reason_phrase,
        response.request.method,
        response.request.url,
    )
