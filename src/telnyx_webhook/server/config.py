"""Receiver server configuration from environment variables."""

from __future__ import annotations

import os


class Settings:
    """Receiver settings, read from environment variables with defaults."""

    def __init__(self) -> None:
        self.webhook_path: str = os.getenv("TELNYX_WEBHOOK_PATH", "/webhooks/telnyx")
        self.log_level: str = os.getenv("TELNYX_LOG_LEVEL", "INFO").upper()
        self.debug: bool = os.getenv("TELNYX_DEBUG", "").lower() in ("1", "true", "yes")
