"""Pydantic response models for the reference receiver."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response body for ``GET /health``."""

    status: str
    version: str


class WebhookAck(BaseModel):
    """Response body for an accepted webhook."""

    status: str = "ok"
    event_type: str | None = None
