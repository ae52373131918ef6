"""Cryptographic primitives for Telnyx webhook verification.

Wraps PyNaCl (libsodium) for Ed25519 signing and verification.  Each
verification step is a small function that either returns its decoded
value or raises :class:`WebhookVerificationError` with the reason the
pipeline should report.

This module never hand-rolls crypto -- every operation delegates to PyNaCl.
"""

from __future__ import annotations

import re

import nacl.exceptions
from nacl.signing import SigningKey, VerifyKey

from telnyx_webhook.protocol.errors import WebhookVerificationError
from telnyx_webhook.protocol.types import (
    MESSAGE_SEPARATOR,
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    RejectReason,
    b64_decode,
    b64_encode,
)

# Optional sign, then 1 to 19 ASCII digits, nothing else
_TIMESTAMP_RE = re.compile(r"[+-]?[0-9]{1,19}")


# ---------------------------------------------------------------------------
# Key generation and serialization
# ---------------------------------------------------------------------------

def generate_keypair() -> tuple[SigningKey, VerifyKey]:
    """Generate an Ed25519 keypair.

    Returns:
        A ``(signing_key, verify_key)`` tuple.
    """
    sk = SigningKey.generate()
    return sk, sk.verify_key


def serialize_signing_key(key: SigningKey) -> str:
    """Serialize a signing key to base64 (32-byte seed)."""
    return b64_encode(key.encode())


def deserialize_signing_key(s: str) -> SigningKey:
    """Restore a signing key from its base64-encoded seed."""
    return SigningKey(b64_decode(s))


def serialize_verify_key(key: VerifyKey) -> str:
    """Serialize a verify (public) key the way the Telnyx portal shows it."""
    return b64_encode(key.encode())


# ---------------------------------------------------------------------------
# Verification steps
# ---------------------------------------------------------------------------

def resolve_public_key(override: str | None, default: str | None = None) -> bytes:
    """Pick the trust anchor and decode it to 32 raw bytes.

    A non-empty *override* wins over *default*.  Any decoding problem is
    reported as ``invalid_public_key`` without further detail.

    Raises:
        WebhookVerificationError: ``missing_public_key`` when neither source
            is set, ``invalid_public_key`` when the chosen one is not
            base64 or not exactly 32 bytes.
    """
    source = override or default
    if not source:
        raise WebhookVerificationError(RejectReason.MISSING_PUBLIC_KEY)
    try:
        decoded = b64_decode(source)
    except ValueError:
        raise WebhookVerificationError(RejectReason.INVALID_PUBLIC_KEY) from None
    if len(decoded) != PUBLIC_KEY_SIZE:
        raise WebhookVerificationError(RejectReason.INVALID_PUBLIC_KEY)
    return decoded


def decode_signature(raw: str) -> bytes:
    """Decode the ``telnyx-signature-ed25519`` header value to 64 raw bytes.

    Malformed signatures share the ``invalid_signature`` reason with
    signatures that fail verification, so a caller cannot tell the two apart.

    Raises:
        WebhookVerificationError: ``invalid_signature``.
    """
    try:
        decoded = b64_decode(raw)
    except ValueError:
        raise WebhookVerificationError(RejectReason.INVALID_SIGNATURE) from None
    if len(decoded) != SIGNATURE_SIZE:
        raise WebhookVerificationError(RejectReason.INVALID_SIGNATURE)
    return decoded


def validate_timestamp(raw: str, now: int, tolerance: int) -> int:
    """Parse the ``telnyx-timestamp`` header and check its freshness.

    *raw* must be a plain base-10 integer literal with an optional sign and
    at most 19 digits.  The window is inclusive: ``abs(now - ts) == tolerance`` passes.

    Returns:
        The parsed timestamp in seconds.

    Raises:
        WebhookVerificationError: ``invalid_timestamp`` or ``timestamp_expired``.
    """
    if not _TIMESTAMP_RE.fullmatch(raw):
        raise WebhookVerificationError(RejectReason.INVALID_TIMESTAMP)
    ts = int(raw)
    if abs(now - ts) > tolerance:
        raise WebhookVerificationError(RejectReason.TIMESTAMP_EXPIRED)
    return ts


def build_signed_message(raw_timestamp: str, raw_payload: bytes) -> bytes:
    """Rebuild the exact bytes Telnyx signed: ``<timestamp>.<body>``.

    The timestamp is used in its original string form and the body is
    not touched, so re-serialized JSON will not verify.
    """
    return raw_timestamp.encode("utf-8") + MESSAGE_SEPARATOR + bytes(raw_payload)


def verify_ed25519(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """Plain Ed25519 verification.  Returns ``False`` instead of raising."""
    try:
        VerifyKey(public_key).verify(message, signature)
    except nacl.exceptions.CryptoError:
        return False
    return True


# ---------------------------------------------------------------------------
# Signing (what the provider does; used for fixtures and local testing)
# ---------------------------------------------------------------------------

def sign_webhook(
    payload: bytes | str, timestamp: str, signing_key: SigningKey
) -> str:
    """Sign ``<timestamp>.<payload>`` with *signing_key*.

    Returns:
        The 64-byte signature as a standard base64 string, ready for the
        ``telnyx-signature-ed25519`` header.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    signed = signing_key.sign(build_signed_message(timestamp, payload))
    return b64_encode(signed.signature)
