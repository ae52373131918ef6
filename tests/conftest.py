"""Shared test fixtures for telnyx_webhook tests."""

from __future__ import annotations

import pytest
from nacl.signing import SigningKey

from telnyx_webhook.protocol.crypto import serialize_verify_key, sign_webhook

# Fixed clock so timestamp checks are deterministic
NOW = 1_700_000_000

SAMPLE_PAYLOAD = b'{"event_type":"call.initiated","data":{"call_control_id":"v2:abc123"}}'


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """No test may pick up a developer's real Telnyx settings."""
    monkeypatch.delenv("TELNYX_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("TELNYX_WEBHOOK_TOLERANCE", raising=False)
    monkeypatch.delenv("TELNYX_WEBHOOK_PATH", raising=False)
    monkeypatch.delenv("TELNYX_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TELNYX_DEBUG", raising=False)


@pytest.fixture()
def keypair():
    """Return an Ed25519 (signing_key, verify_key) tuple."""
    sk = SigningKey.generate()
    return sk, sk.verify_key


@pytest.fixture()
def public_key_b64(keypair) -> str:
    """The keypair's public half, base64 encoded like the Telnyx portal shows it."""
    _, vk = keypair
    return serialize_verify_key(vk)


@pytest.fixture()
def other_public_key_b64() -> str:
    """A valid public key that did not sign anything."""
    return serialize_verify_key(SigningKey.generate().verify_key)


@pytest.fixture()
def now() -> int:
    return NOW


@pytest.fixture()
def sample_payload() -> bytes:
    return SAMPLE_PAYLOAD


@pytest.fixture()
def make_signature(keypair):
    """Factory: sign ``<timestamp>.<payload>`` with the test keypair."""
    sk, _ = keypair

    def _sign(payload: bytes | str, timestamp: str) -> str:
        return sign_webhook(payload, timestamp, sk)

    return _sign
