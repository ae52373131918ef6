"""telnyx_webhook -- authenticate Telnyx webhooks (Ed25519 + timestamp).

Top-level convenience re-exports::

    from telnyx_webhook import verify, is_valid, verify_request, Accepted, Rejected
    from telnyx_webhook.protocol import RejectReason, sign_webhook  # primitives
"""

__version__ = "0.1.0"

from telnyx_webhook.protocol.types import RejectReason
from telnyx_webhook.sdk.config import WebhookConfig
from telnyx_webhook.sdk.request import MappingRequestView, RequestView
from telnyx_webhook.sdk.webhook import (
    Accepted,
    Rejected,
    VerificationOutcome,
    is_valid,
    verify,
    verify_request,
)

__all__ = [
    "__version__",
    "RejectReason",
    "WebhookConfig",
    "RequestView",
    "MappingRequestView",
    "Accepted",
    "Rejected",
    "VerificationOutcome",
    "verify",
    "is_valid",
    "verify_request",
]
