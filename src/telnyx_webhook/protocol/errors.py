"""Telnyx webhook exception hierarchy.

All package-specific exceptions inherit from :class:`TelnyxWebhookError`.
"""

from __future__ import annotations

from telnyx_webhook.protocol.types import RejectReason


class TelnyxWebhookError(Exception):
    """Base exception for all telnyx_webhook errors."""


class WebhookVerificationError(TelnyxWebhookError):
    """Raised by a verification step; carries the rejection reason.

    The pipeline converts these into ``Rejected`` outcomes, so callers of
    ``verify()`` never see them.
    """

    def __init__(self, reason: RejectReason) -> None:
        super().__init__(reason.value)
        self.reason = reason


class ConfigurationError(TelnyxWebhookError):
    """Raised when environment configuration is malformed."""
