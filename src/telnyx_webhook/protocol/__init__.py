"""Telnyx webhook protocol -- constants, errors and Ed25519 primitives.

Public API re-exports for ``telnyx_webhook.protocol``.
"""

from telnyx_webhook.protocol.types import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    DEFAULT_TOLERANCE,
    RejectReason,
    b64_encode,
    b64_decode,
    unix_timestamp,
)

from telnyx_webhook.protocol.errors import (
    TelnyxWebhookError,
    WebhookVerificationError,
    ConfigurationError,
)

from telnyx_webhook.protocol.crypto import (
    generate_keypair,
    serialize_signing_key,
    deserialize_signing_key,
    serialize_verify_key,
    resolve_public_key,
    decode_signature,
    validate_timestamp,
    build_signed_message,
    verify_ed25519,
    sign_webhook,
)

__all__ = [
    # Types
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    "DEFAULT_TOLERANCE",
    "RejectReason",
    "b64_encode",
    "b64_decode",
    "unix_timestamp",
    # Errors
    "TelnyxWebhookError",
    "WebhookVerificationError",
    "ConfigurationError",
    # Crypto
    "generate_keypair",
    "serialize_signing_key",
    "deserialize_signing_key",
    "serialize_verify_key",
    "resolve_public_key",
    "decode_signature",
    "validate_timestamp",
    "build_signed_message",
    "verify_ed25519",
    "sign_webhook",
]
