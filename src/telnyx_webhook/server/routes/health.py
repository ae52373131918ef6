"""Liveness endpoint for the reference receiver."""

from __future__ import annotations

from fastapi import APIRouter

from telnyx_webhook import __version__
from telnyx_webhook.server.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return receiver status. No authentication required."""
    return HealthResponse(status="ok", version=__version__)
