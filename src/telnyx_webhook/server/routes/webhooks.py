"""Webhook intake route.

The signature check runs as a dependency, so the handler body only ever
sees authentic, fresh webhooks.  The event is decoded from the captured
raw body and handed to ``app.state.event_handler`` when one is set.
"""

from __future__ import annotations

import inspect
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from telnyx_webhook.server.auth import require_telnyx_signature
from telnyx_webhook.server.models import WebhookAck

logger = logging.getLogger(__name__)


def _event_type(event: object) -> str | None:
    """Telnyx v2 nests the type under ``data``; older payloads keep it top-level."""
    if not isinstance(event, dict):
        return None
    data = event.get("data")
    if isinstance(data, dict) and isinstance(data.get("event_type"), str):
        return data["event_type"]
    value = event.get("event_type")
    return value if isinstance(value, str) else None


def create_webhook_router(path: str) -> APIRouter:
    """Build a router serving ``POST <path>``."""
    router = APIRouter()

    @router.post(
        path,
        response_model=WebhookAck,
        dependencies=[Depends(require_telnyx_signature)],
    )
    async def receive_webhook(request: Request) -> WebhookAck:
        """Accept a verified Telnyx webhook."""
        try:
            event = json.loads(request.state.raw_body)
        except ValueError:
            raise HTTPException(status_code=400, detail="Body is not valid JSON") from None

        event_type = _event_type(event)
        logger.info("Accepted Telnyx webhook: %s", event_type or "<unknown>")

        handler = getattr(request.app.state, "event_handler", None)
        if handler is not None:
            result = handler(event)
            if inspect.isawaitable(result):
                await result

        return WebhookAck(event_type=event_type)

    return router
