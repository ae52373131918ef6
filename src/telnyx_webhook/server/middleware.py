"""ASGI middleware that captures the raw request body for signature checks.

Signatures cover the body bytes exactly as sent, so they must be kept
before any JSON parsing happens.  The middleware buffers the body, stores
it at ``scope["state"]["raw_body"]`` (readable as ``request.state.raw_body``)
and replays it to the wrapped application, which can still parse it
normally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RawBodyMiddleware:
    """Buffer HTTP request bodies into ``request.state.raw_body``.

    Args:
        app: The wrapped ASGI application.
        paths: Only capture for these exact paths.  ``None`` captures for
            every HTTP request.
    """

    def __init__(self, app: ASGIApp, paths: Iterable[str] | None = None) -> None:
        self.app = app
        self.paths = frozenset(paths) if paths is not None else None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        if self.paths is not None and scope.get("path") not in self.paths:
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        disconnect: Message | None = None
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                disconnect = message
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        scope.setdefault("state", {})["raw_body"] = body
        logger.debug("Captured %d byte body for %s", len(body), scope.get("path"))

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if disconnect is not None:
                return disconnect
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)
