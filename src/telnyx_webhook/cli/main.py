"""telnyx-webhook CLI -- verify and sign Telnyx webhooks from the shell.

Thin wrapper around the verification pipeline using click.  Useful for
checking a captured webhook body against its headers, and for producing
signed fixtures with a local test key.
"""

from __future__ import annotations

import logging

import click

from telnyx_webhook import __version__
from telnyx_webhook.protocol import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    TelnyxWebhookError,
    deserialize_signing_key,
    generate_keypair,
    serialize_signing_key,
    serialize_verify_key,
    sign_webhook,
    unix_timestamp,
)
from telnyx_webhook.sdk.config import WebhookConfig
from telnyx_webhook.sdk.webhook import Rejected, verify


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="telnyx-webhook")
@click.option("--debug", is_flag=True, help="Log each verification step.")
def cli(debug: bool) -> None:
    """telnyx-webhook -- Telnyx webhook signature tools."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# telnyx-webhook verify
# ---------------------------------------------------------------------------


@cli.command("verify")
@click.argument("payload_file", type=click.File("rb"))
@click.option("--signature", "-s", required=True, help=f"Value of the {SIGNATURE_HEADER} header.")
@click.option("--timestamp", "-t", required=True, help=f"Value of the {TIMESTAMP_HEADER} header.")
@click.option(
    "--public-key",
    "-k",
    default=None,
    help="Base64 public key (default: TELNYX_PUBLIC_KEY).",
)
@click.option(
    "--tolerance",
    type=click.IntRange(min=0),
    default=None,
    help="Allowed clock skew in seconds (default: TELNYX_WEBHOOK_TOLERANCE or 300).",
)
def verify_cmd(
    payload_file,
    signature: str,
    timestamp: str,
    public_key: str | None,
    tolerance: int | None,
) -> None:
    """Verify a raw webhook body (PAYLOAD_FILE, or - for stdin)."""
    payload = payload_file.read()
    try:
        config = WebhookConfig.from_env()
    except TelnyxWebhookError as exc:
        _error(f"Error: {exc}")

    outcome = verify(
        payload,
        signature,
        timestamp,
        public_key=public_key,
        tolerance=tolerance,
        config=config,
    )
    if isinstance(outcome, Rejected):
        _error(f"rejected: {outcome.reason.value}")
    click.echo("accepted")


# ---------------------------------------------------------------------------
# telnyx-webhook sign
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("payload_file", type=click.File("rb"))
@click.option(
    "--private-key",
    "-p",
    required=True,
    help="Base64 Ed25519 seed (see `telnyx-webhook keygen`).",
)
@click.option("--timestamp", "-t", default=None, help="Unix seconds (default: now).")
def sign(payload_file, private_key: str, timestamp: str | None) -> None:
    """Print the headers Telnyx would send for PAYLOAD_FILE."""
    try:
        signing_key = deserialize_signing_key(private_key)
    except (ValueError, TypeError):
        _error("Error: --private-key must be a base64 encoded 32-byte seed")

    ts = timestamp if timestamp is not None else str(unix_timestamp())
    signature = sign_webhook(payload_file.read(), ts, signing_key)
    click.echo(f"{TIMESTAMP_HEADER}: {ts}")
    click.echo(f"{SIGNATURE_HEADER}: {signature}")


# ---------------------------------------------------------------------------
# telnyx-webhook keygen
# ---------------------------------------------------------------------------


@cli.command()
def keygen() -> None:
    """Generate a test Ed25519 keypair."""
    sk, vk = generate_keypair()
    click.echo(f"Private key: {serialize_signing_key(sk)}")
    click.echo(f"Public key:  {serialize_verify_key(vk)}")


if __name__ == "__main__":
    cli()
