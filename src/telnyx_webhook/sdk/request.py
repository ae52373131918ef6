"""Request adapter: pull the signature inputs out of an inbound request.

Verification only needs two header values and the raw body.  Any web
framework request can take part by implementing :class:`RequestView`;
Starlette/FastAPI requests are adapted automatically.

The raw body must already have been captured by an earlier step in the
request chain (see :class:`telnyx_webhook.server.middleware.RawBodyMiddleware`).
This module never reads the request stream itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol, Union, runtime_checkable

from starlette.requests import Request

from telnyx_webhook.protocol.errors import WebhookVerificationError
from telnyx_webhook.protocol.types import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    RejectReason,
)


@runtime_checkable
class RequestView(Protocol):
    """The narrow slice of a request that verification looks at."""

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive), if any."""
        ...

    def raw_body(self) -> bytes | None:
        """Return the previously captured raw body, if any."""
        ...


class MappingRequestView:
    """A :class:`RequestView` over plain data.

    Handy for frameworks without a dedicated adapter, for queued webhooks
    replayed from storage, and for tests.  *headers* may be a mapping or an
    iterable of ``(name, value)`` pairs; with repeated names the first
    value wins.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | Iterable[tuple[str, str]],
        raw_body: bytes | None = None,
    ) -> None:
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        self._headers: dict[str, str] = {}
        for name, value in pairs:
            self._headers.setdefault(name.lower(), value)
        self._raw_body = raw_body

    def header(self, name: str) -> str | None:
        return self._headers.get(name.lower())

    def raw_body(self) -> bytes | None:
        return self._raw_body


class StarletteRequestView:
    """A :class:`RequestView` over a Starlette (or FastAPI) request.

    Reads the body stored at ``request.state.raw_body``.
    """

    def __init__(self, request: Request) -> None:
        self._request = request

    def header(self, name: str) -> str | None:
        # Starlette headers are already case-insensitive
        return self._request.headers.get(name)

    def raw_body(self) -> bytes | None:
        return getattr(self._request.state, "raw_body", None)


AnyRequest = Union[RequestView, Request]


def as_request_view(request: AnyRequest) -> RequestView:
    """Wrap framework request objects; pass :class:`RequestView` through."""
    if isinstance(request, Request):
        return StarletteRequestView(request)
    return request


def from_request(request: AnyRequest) -> tuple[bytes, str, str]:
    """Extract ``(raw_body, signature, timestamp)`` from *request*.

    Raises:
        WebhookVerificationError: ``missing_header`` if either Telnyx header
            is absent, ``missing_raw_body`` if no body was captured.
    """
    view = as_request_view(request)

    signature = view.header(SIGNATURE_HEADER)
    if signature is None:
        raise WebhookVerificationError(RejectReason.MISSING_HEADER)

    timestamp = view.header(TIMESTAMP_HEADER)
    if timestamp is None:
        raise WebhookVerificationError(RejectReason.MISSING_HEADER)

    raw_body = view.raw_body()
    if raw_body is None:
        raise WebhookVerificationError(RejectReason.MISSING_RAW_BODY)

    return raw_body, signature, timestamp
