"""Shared fixtures for the FastAPI receiver tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from telnyx_webhook.protocol.types import unix_timestamp
from telnyx_webhook.sdk.config import WebhookConfig
from telnyx_webhook.server.app import create_app


@pytest.fixture()
def received_events() -> list:
    return []


@pytest.fixture()
def app(public_key_b64, received_events):
    """Receiver app trusting the test keypair and recording handled events."""
    return create_app(
        config=WebhookConfig(public_key=public_key_b64),
        event_handler=received_events.append,
    )


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def signed_headers(make_signature):
    """Factory: headers Telnyx would send for *payload* right now."""

    def _headers(payload: bytes, timestamp: str | None = None) -> dict[str, str]:
        ts = timestamp if timestamp is not None else str(unix_timestamp())
        return {
            "Content-Type": "application/json",
            "telnyx-signature-ed25519": make_signature(payload, ts),
            "telnyx-timestamp": ts,
        }

    return _headers
