"""Verification configuration: a frozen dataclass plus environment lookups."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from telnyx_webhook.protocol.errors import ConfigurationError
from telnyx_webhook.protocol.types import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)

PUBLIC_KEY_ENV = "TELNYX_PUBLIC_KEY"
TOLERANCE_ENV = "TELNYX_WEBHOOK_TOLERANCE"


@dataclass(frozen=True)
class WebhookConfig:
    """Process-wide defaults consumed by the verification pipeline.

    ``public_key`` is the base64 Ed25519 key from the Telnyx portal
    (Account -> API Keys -> Public Key).  ``tolerance`` is the allowed clock
    skew in seconds.  Per-call arguments to ``verify()`` take precedence
    over both.
    """

    public_key: str | None = None
    tolerance: int = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, int):
            raise ConfigurationError(
                f"tolerance must be an integer number of seconds, got {self.tolerance!r}"
            )
        if self.tolerance < 0:
            raise ConfigurationError(
                f"tolerance must be non-negative, got {self.tolerance}"
            )
        # Empty string behaves like "not configured"
        if self.public_key == "":
            object.__setattr__(self, "public_key", None)

    @classmethod
    def from_env(cls) -> WebhookConfig:
        """Build a config from ``TELNYX_PUBLIC_KEY`` and ``TELNYX_WEBHOOK_TOLERANCE``.

        Raises:
            ConfigurationError: If ``TELNYX_WEBHOOK_TOLERANCE`` is not a
                non-negative integer.
        """
        return cls(public_key=public_key_from_env(), tolerance=tolerance_from_env())


def public_key_from_env() -> str | None:
    """Return ``TELNYX_PUBLIC_KEY``, or ``None`` when unset or empty."""
    public_key = os.getenv(PUBLIC_KEY_ENV) or None
    if public_key is None:
        logger.debug("%s is not set", PUBLIC_KEY_ENV)
    return public_key


def tolerance_from_env() -> int:
    """Return ``TELNYX_WEBHOOK_TOLERANCE`` in seconds, or the default when blank.

    Raises:
        ConfigurationError: If the value is not a non-negative integer.
    """
    raw_tolerance = os.getenv(TOLERANCE_ENV)
    if raw_tolerance is None or raw_tolerance.strip() == "":
        return DEFAULT_TOLERANCE
    try:
        tolerance = int(raw_tolerance)
    except ValueError:
        raise ConfigurationError(
            f"{TOLERANCE_ENV} must be an integer, got {raw_tolerance!r}"
        ) from None
    if tolerance < 0:
        raise ConfigurationError(f"{TOLERANCE_ENV} must be non-negative, got {tolerance}")
    return tolerance
