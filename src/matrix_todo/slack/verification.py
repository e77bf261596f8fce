"""Slack request signature verification.

``verify_signature`` is a pure check over the raw body and headers;
``verified_body`` wraps it as a FastAPI dependency.
"""

import logging
import time
from collections.abc import Mapping

from fastapi import HTTPException, Request
from slack_sdk.signature import Clock, SignatureVerifier

from matrix_todo.config import get_settings

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-slack-signature"
TIMESTAMP_HEADER = "x-slack-request-timestamp"


class _FixedClock(Clock):
    """Clock pinned to the caller-supplied ``now`` so verification is deterministic."""

    def __init__(self, now: float) -> None:
        self._now = now

    def now(self) -> float:
        return self._now


def verify_signature(
    headers: Mapping[str, str],
    body: bytes,
    signing_secret: str,
    now: float,
) -> bool:
    """Return True only if ``body`` was signed by Slack within the replay window.

    The signature is ``v0=`` + hex HMAC-SHA256 over ``v0:{timestamp}:{body}``
    and is compared in constant time. Timestamps more than 300 seconds from
    ``now`` (in either direction) are rejected; exactly 300 is accepted.

    Never raises: missing headers, an empty secret, an unparseable timestamp,
    a non-UTF-8 body or a malformed signature all return False.
    """
    normalized = {key.lower(): value for key, value in headers.items()}
    signature = normalized.get(SIGNATURE_HEADER) or ""
    timestamp = normalized.get(TIMESTAMP_HEADER) or ""

    if not signature or not timestamp or not signing_secret:
        return False

    try:
        int(timestamp)
    except ValueError:
        return False

    verifier = SignatureVerifier(signing_secret=signing_secret, clock=_FixedClock(now))
    try:
        return verifier.is_valid(
            body=body.decode("utf-8"), timestamp=timestamp, signature=signature
        )
    except (TypeError, ValueError):
        # non-ASCII signature (compare_digest) or undecodable body
        return False


async def verified_body(request: Request) -> bytes:
    """Verify the Slack signature and return the raw request body.

    Reads the raw body FIRST, before any JSON parsing, so verification runs
    over the exact bytes Slack signed.

    Raises HTTPException(401) with a generic detail on any failure.
    """
    settings = get_settings()
    body = await request.body()

    if not verify_signature(request.headers, body, settings.slack_signing_secret, time.time()):
        logger.warning(
            "Rejected Slack request on %s (signature=%s, timestamp=%s, secret=%s)",
            request.url.path,
            bool(request.headers.get(SIGNATURE_HEADER)),
            bool(request.headers.get(TIMESTAMP_HEADER)),
            bool(settings.slack_signing_secret),
        )
        raise HTTPException(status_code=401, detail="Invalid request")

    return body
