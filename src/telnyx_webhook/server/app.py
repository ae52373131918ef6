"""FastAPI application factory for a reference Telnyx webhook receiver."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import HTTPException, RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from telnyx_webhook import __version__
from telnyx_webhook.sdk.config import WebhookConfig
from telnyx_webhook.server.config import Settings
from telnyx_webhook.server.middleware import RawBodyMiddleware

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]

# Consistent JSON error shape: {"error": "<code>", "detail": "<message>"}
_STATUS_TO_ERROR = {
    400: "bad_request",
    401: "unauthorized",
    404: "not_found",
    405: "method_not_allowed",
    422: "validation_error",
}


def create_app(
    config: WebhookConfig | None = None,
    settings: Settings | None = None,
    event_handler: EventHandler | None = None,
) -> FastAPI:
    """Create the receiver application.

    Args:
        config: Verification defaults.  When omitted, each request reads
            ``TELNYX_PUBLIC_KEY`` / ``TELNYX_WEBHOOK_TOLERANCE`` afresh.
        settings: Server settings; read from the environment when omitted.
        event_handler: Called with every verified, decoded event.  May be
            a coroutine function.

    .. note:: TLS is terminated by the deployment platform, not here.
    """
    settings = settings or Settings()

    # Configure logging from settings
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.debug:
        logging.getLogger("telnyx_webhook").setLevel(logging.DEBUG)

    app = FastAPI(title="Telnyx Webhook Receiver", version=__version__)
    app.state.settings = settings
    app.state.webhook_config = config
    app.state.event_handler = event_handler

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _STATUS_TO_ERROR.get(exc.status_code, "error"),
                "detail": exc.detail,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "detail": str(exc),
            },
        )

    app.add_middleware(RawBodyMiddleware, paths=[settings.webhook_path])

    from telnyx_webhook.server.routes.health import router as health_router
    from telnyx_webhook.server.routes.webhooks import create_webhook_router

    app.include_router(health_router)
    app.include_router(create_webhook_router(settings.webhook_path))

    logger.info("Telnyx webhook receiver listening on %s", settings.webhook_path)
    return app
