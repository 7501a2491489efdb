"""
LINE Signature Verification

SECURITY BOUNDARY - Verify the x-line-signature HMAC.
No relay imports. No retries. No logic.
"""

import base64
import hashlib
import hmac
import logging
from typing import Optional

from fastapi import HTTPException, Request, status

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-line-signature"


def compute_signature(body: bytes, channel_secret: str) -> str:
    """
    Compute the signature LINE attaches to a webhook request.

    base64(HMAC-SHA256(channel_secret, body))

    The body must be the exact bytes received on the wire. Hashing a
    re-serialised copy of the parsed JSON does not reproduce LINE's digest
    once key order or whitespace differ.
    """
    digest = hmac.new(
        key=channel_secret.encode("utf-8"),
        msg=body,
        digestmod=hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


def verify_signature(
    body: bytes,
    signature: Optional[str],
    channel_secret: str,
) -> bool:
    """
    Check a webhook signature. Fails closed.

    Args:
        body: Raw request body bytes
        signature: Value of the x-line-signature header (None if absent)
        channel_secret: LINE channel secret

    Returns:
        True only if the header is present and matches the computed digest
    """
    if not signature or not channel_secret:
        return False

    expected = compute_signature(body, channel_secret)

    # Compare (constant-time to prevent timing attacks)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


async def require_valid_signature(
    request: Request,
    body: bytes,
    channel_secret: str,
) -> None:
    """
    Verify the signature of an inbound webhook request.

    Raises:
        HTTPException(403): Missing or invalid signature
    """
    signature = request.headers.get(SIGNATURE_HEADER)

    if not verify_signature(body, signature, channel_secret):
        logger.warning(
            "Invalid signature. Request denied.",
            extra={"signature_present": bool(signature)},
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid signature",
        )
