"""Telnyx webhook SDK -- receiver-side verification pipeline."""

from telnyx_webhook.sdk.config import WebhookConfig
from telnyx_webhook.sdk.request import (
    MappingRequestView,
    RequestView,
    StarletteRequestView,
    from_request,
)
from telnyx_webhook.sdk.webhook import (
    Accepted,
    Rejected,
    VerificationOutcome,
    is_valid,
    verify,
    verify_request,
)

__all__ = [
    "WebhookConfig",
    "RequestView",
    "MappingRequestView",
    "StarletteRequestView",
    "from_request",
    "Accepted",
    "Rejected",
    "VerificationOutcome",
    "verify",
    "is_valid",
    "verify_request",
]
