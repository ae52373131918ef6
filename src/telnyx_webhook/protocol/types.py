"""Core types, constants, and utility functions for Telnyx webhook signing."""

from __future__ import annotations

import base64
import time
from enum import Enum


# Header names fixed by the Telnyx webhook protocol
SIGNATURE_HEADER = "telnyx-signature-ed25519"
TIMESTAMP_HEADER = "telnyx-timestamp"

# Raw Ed25519 sizes in bytes
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64

# Maximum allowed distance between the signed timestamp and now (seconds)
DEFAULT_TOLERANCE = 300

# Separator between the timestamp and the body in the signed message
MESSAGE_SEPARATOR = b"."


class RejectReason(str, Enum):
    """Every reason a webhook can be rejected.

    Using ``str, Enum`` so that ``RejectReason.INVALID_SIGNATURE == "invalid_signature"``
    is True, which keeps log lines and JSON error bodies readable.
    """

    INVALID_PARAMETERS = "invalid_parameters"
    MISSING_PUBLIC_KEY = "missing_public_key"
    INVALID_PUBLIC_KEY = "invalid_public_key"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_TIMESTAMP = "invalid_timestamp"
    TIMESTAMP_EXPIRED = "timestamp_expired"
    MISSING_HEADER = "missing_header"
    MISSING_RAW_BODY = "missing_raw_body"


def b64_encode(data: bytes) -> str:
    """Standard-alphabet, padded base64 encode *data*."""
    return base64.b64encode(data).decode("ascii")


def b64_decode(s: str) -> bytes:
    """Strictly decode standard-alphabet, padded base64.

    Characters outside the alphabet and missing padding are errors rather
    than being silently discarded.

    Raises:
        ValueError: If *s* is not valid base64 (``binascii.Error`` is a
            subclass).
    """
    return base64.b64decode(s, validate=True)


def unix_timestamp() -> int:
    """Return the current wall-clock time in whole seconds since the epoch."""
    return int(time.time())
