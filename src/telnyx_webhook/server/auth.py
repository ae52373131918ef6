"""FastAPI dependency that only lets authentic Telnyx webhooks through.

Requires :class:`~telnyx_webhook.server.middleware.RawBodyMiddleware` on
the route's path so the raw body is available.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from telnyx_webhook.sdk.config import WebhookConfig
from telnyx_webhook.sdk.webhook import Rejected, verify_request

logger = logging.getLogger(__name__)


async def require_telnyx_signature(request: Request) -> None:
    """FastAPI dependency: verify the Telnyx signature on *request*.

    Uses the ``WebhookConfig`` stored on ``app.state.webhook_config`` when
    present, otherwise the environment.  Raises ``HTTPException(401)`` with
    the rejection reason as detail on any failure.
    """
    config: WebhookConfig | None = getattr(request.app.state, "webhook_config", None)
    outcome = verify_request(request, config=config)
    if isinstance(outcome, Rejected):
        client = request.client.host if request.client else "unknown"
        logger.warning(
            "Rejected Telnyx webhook from %s: %s", client, outcome.reason.value
        )
        raise HTTPException(status_code=401, detail=outcome.reason.value)
