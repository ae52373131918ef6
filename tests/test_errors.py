"""Tests for telnyx_webhook.protocol.errors module."""

from __future__ import annotations

from telnyx_webhook.protocol.errors import (
    ConfigurationError,
    TelnyxWebhookError,
    WebhookVerificationError,
)
from telnyx_webhook.protocol.types import RejectReason


class TestHierarchy:
    def test_verification_error_is_base_error(self):
        assert issubclass(WebhookVerificationError, TelnyxWebhookError)

    def test_configuration_error_is_base_error(self):
        assert issubclass(ConfigurationError, TelnyxWebhookError)

    def test_base_is_exception(self):
        assert issubclass(TelnyxWebhookError, Exception)


class TestWebhookVerificationError:
    def test_carries_reason(self):
        exc = WebhookVerificationError(RejectReason.TIMESTAMP_EXPIRED)
        assert exc.reason is RejectReason.TIMESTAMP_EXPIRED

    def test_message_is_reason_value(self):
        exc = WebhookVerificationError(RejectReason.MISSING_HEADER)
        assert str(exc) == "missing_header"
