"""Receiver-side Telnyx webhook signature verification.

Telnyx signs every webhook with Ed25519 over ``<timestamp>.<raw body>``
and sends the result in two headers:

- ``telnyx-signature-ed25519``: base64 signature (64 bytes)
- ``telnyx-timestamp``: Unix seconds as text

Usage::

    from telnyx_webhook import Accepted, verify

    outcome = verify(raw_body, signature, timestamp, public_key=portal_key)
    if isinstance(outcome, Accepted):
        # payload is authentic and fresh
        ...
    else:
        logger.warning("rejected webhook: %s", outcome.reason)

The steps always run in the same order and stop at the first failure:
resolve key, decode signature, check timestamp, verify.  Which reason a
caller sees when several inputs are wrong therefore never changes.
Expected failures come back as :class:`Rejected`; nothing is raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Union

from telnyx_webhook.protocol.crypto import (
    build_signed_message,
    decode_signature,
    resolve_public_key,
    validate_timestamp,
    verify_ed25519,
)
from telnyx_webhook.protocol.errors import ConfigurationError, WebhookVerificationError
from telnyx_webhook.protocol.types import RejectReason, unix_timestamp
from telnyx_webhook.sdk.config import WebhookConfig, public_key_from_env, tolerance_from_env
from telnyx_webhook.sdk.request import AnyRequest, from_request

logger = logging.getLogger(__name__)

_PAYLOAD_TYPES = (bytes, bytearray, memoryview, str)


@dataclass(frozen=True)
class Accepted:
    """The webhook is authentic and within the tolerance window."""

    ok: ClassVar[bool] = True

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The webhook must not be trusted; ``reason`` says which check failed."""

    reason: RejectReason
    ok: ClassVar[bool] = False

    def __bool__(self) -> bool:
        return False


VerificationOutcome = Union[Accepted, Rejected]


def _reject(reason: RejectReason) -> Rejected:
    logger.debug("Webhook rejected: %s", reason.value)
    return Rejected(reason)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _valid_parameters(payload, signature, timestamp, public_key, tolerance, now) -> bool:
    if not isinstance(payload, _PAYLOAD_TYPES):
        return False
    if not isinstance(signature, str) or not isinstance(timestamp, str):
        return False
    if public_key is not None and not isinstance(public_key, str):
        return False
    if tolerance is not None and (not _is_int(tolerance) or tolerance < 0):
        return False
    if now is not None and not _is_int(now):
        return False
    return True


def verify(
    payload: bytes | str,
    signature: str,
    timestamp: str,
    *,
    public_key: str | None = None,
    tolerance: int | None = None,
    config: WebhookConfig | None = None,
    now: int | None = None,
) -> VerificationOutcome:
    """Verify a Telnyx webhook.

    Args:
        payload: The raw request body exactly as received.  A ``str`` is
            UTF-8 encoded; never pass re-serialized JSON.
        signature: The ``telnyx-signature-ed25519`` header value.
        timestamp: The ``telnyx-timestamp`` header value.
        public_key: Base64 public key overriding ``config.public_key``.
        tolerance: Allowed clock skew in seconds, overriding ``config.tolerance``.
        config: Defaults to use; read from the environment when omitted.
        now: Current Unix time in seconds; the system clock when omitted.

    Returns:
        :class:`Accepted`, or :class:`Rejected` with one of
        ``invalid_parameters``, ``missing_public_key``, ``invalid_public_key``,
        ``invalid_signature``, ``invalid_timestamp``, ``timestamp_expired``.
    """
    if not _valid_parameters(payload, signature, timestamp, public_key, tolerance, now):
        return _reject(RejectReason.INVALID_PARAMETERS)
    if isinstance(payload, str):
        try:
            payload = payload.encode("utf-8")
        except UnicodeEncodeError:
            return _reject(RejectReason.INVALID_PARAMETERS)

    if config is not None:
        default_key = config.public_key
        if tolerance is None:
            tolerance = config.tolerance
    else:
        # Only read the environment values the per-call arguments leave open
        default_key = None if public_key else public_key_from_env()
        if tolerance is None:
            try:
                tolerance = tolerance_from_env()
            except ConfigurationError as exc:
                logger.error("Cannot verify webhook: %s", exc)
                return _reject(RejectReason.INVALID_PARAMETERS)
    if now is None:
        now = unix_timestamp()

    try:
        key = resolve_public_key(public_key, default_key)
        sig = decode_signature(signature)
        validate_timestamp(timestamp, now, tolerance)
    except WebhookVerificationError as exc:
        return _reject(exc.reason)

    message = build_signed_message(timestamp, payload)
    if not verify_ed25519(message, sig, key):
        return _reject(RejectReason.INVALID_SIGNATURE)
    return Accepted()


def is_valid(
    payload: bytes | str,
    signature: str,
    timestamp: str,
    *,
    public_key: str | None = None,
    tolerance: int | None = None,
    config: WebhookConfig | None = None,
    now: int | None = None,
) -> bool:
    """Boolean form of :func:`verify`: ``True`` iff the outcome is :class:`Accepted`."""
    outcome = verify(
        payload,
        signature,
        timestamp,
        public_key=public_key,
        tolerance=tolerance,
        config=config,
        now=now,
    )
    return isinstance(outcome, Accepted)


def verify_request(
    request: AnyRequest,
    *,
    public_key: str | None = None,
    tolerance: int | None = None,
    config: WebhookConfig | None = None,
    now: int | None = None,
) -> VerificationOutcome:
    """Extract the Telnyx headers and raw body from *request*, then :func:`verify`.

    On top of the :func:`verify` reasons this can reject with
    ``missing_header`` or ``missing_raw_body``.
    """
    try:
        raw_body, signature, timestamp = from_request(request)
    except WebhookVerificationError as exc:
        return _reject(exc.reason)
    return verify(
        raw_body,
        signature,
        timestamp,
        public_key=public_key,
        tolerance=tolerance,
        config=config,
        now=now,
    )
