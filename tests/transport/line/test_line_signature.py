"""
LINE Signature Verification Tests

Verify x-line-signature HMAC-SHA256 (base64) validation.
"""

import base64
import hashlib
import hmac
import json
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from transport.line.security import (
    compute_signature,
    require_valid_signature,
    verify_signature,
)

SECRET = "channel_secret"


def reference_signature(body: bytes, secret: str = SECRET) -> str:
    return base64.b64encode(
        hmac.new(secret.encode(), body, hashlib.sha256).digest()
    ).decode()


class TestComputeSignature:
    """Digest format."""

    def test_matches_reference_hmac(self):
        body = b'{"events":[]}'
        assert compute_signature(body, SECRET) == reference_signature(body)

    def test_different_secret_changes_digest(self):
        body = b'{"events":[]}'
        assert compute_signature(body, SECRET) != compute_signature(body, "other")


class TestVerifySignature:
    """Boolean verification, fail closed."""

    def test_valid_signature(self):
        body = b'{"destination":"U1","events":[]}'
        assert verify_signature(body, reference_signature(body), SECRET) is True

    def test_invalid_signature(self):
        assert verify_signature(b"payload", "bm90LWEtc2lnbmF0dXJl", SECRET) is False

    def test_missing_header_fails_closed(self):
        assert verify_signature(b"payload", None, SECRET) is False
        assert verify_signature(b"payload", "", SECRET) is False

    def test_missing_secret_fails_closed(self):
        body = b"payload"
        assert verify_signature(body, reference_signature(body, ""), "") is False

    def test_tampered_body_rejected(self):
        body = b'{"events":[{"type":"message"}]}'
        signature = reference_signature(body)
        assert verify_signature(body + b" ", signature, SECRET) is False

    def test_digest_is_over_raw_bytes_not_reserialised_json(self):
        """Whitespace and key order as sent must be preserved for hashing."""
        raw = b'{ "events" : [],  "destination": "U1" }'
        signature = reference_signature(raw)

        reserialised = json.dumps(json.loads(raw)).encode()

        assert verify_signature(raw, signature, SECRET) is True
        assert verify_signature(reserialised, signature, SECRET) is False

    def test_non_ascii_body(self):
        body = json.dumps({"text": "今日の運勢"}, ensure_ascii=False).encode("utf-8")
        assert verify_signature(body, reference_signature(body), SECRET) is True


class TestRequireValidSignature:
    """HTTP boundary: 403 on any failure."""

    @pytest.mark.asyncio
    async def test_valid_signature_passes(self):
        body = b'{"events":[]}'
        request = MagicMock()
        request.headers = {"x-line-signature": reference_signature(body)}

        # Should not raise
        await require_valid_signature(request, body, SECRET)

    @pytest.mark.asyncio
    async def test_invalid_signature_returns_403(self):
        request = MagicMock()
        request.headers = {"x-line-signature": "invalid"}

        with pytest.raises(HTTPException) as exc_info:
            await require_valid_signature(request, b"payload", SECRET)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_missing_signature_returns_403(self):
        request = MagicMock()
        request.headers = {}

        with pytest.raises(HTTPException) as exc_info:
            await require_valid_signature(request, b"payload", SECRET)

        assert exc_info.value.status_code == 403
