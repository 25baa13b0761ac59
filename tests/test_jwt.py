"""
Tests for signed token issuance and verification.
"""

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode

import pytest

from auth.jwt import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    create_token,
    verify_token,
)

SECRET = "unit-test-secret-with-enough-entropy"


def _signed(payload_bytes: bytes, secret: str = SECRET) -> str:
    encoded = urlsafe_b64encode(payload_bytes)
    sig = hmac.new(secret.encode(), encoded, hashlib.sha256).hexdigest()
    return encoded.decode() + "." + sig


class TestCreateToken:
    def test_round_trip_returns_user_id(self):
        token = create_token("user-123", SECRET)
        assert verify_token(token, SECRET) == "user-123"

    def test_payload_claims(self):
        token = create_token("user-123", SECRET, ttl=3600, now=1_000_000)
        payload = json.loads(urlsafe_b64decode(token.split(".")[0]))
        assert payload == {
            "sub": "user-123",
            "iss": "todo-service",
            "iat": 1_000_000,
            "exp": 1_003_600,
        }


class TestVerifyToken:
    def test_expired_after_ttl(self):
        issued = time.time() - 7200
        token = create_token("user-123", SECRET, ttl=3600, now=issued)
        with pytest.raises(TokenExpiredError):
            verify_token(token, SECRET)

    def test_expired_exactly_at_expiry(self):
        token = create_token("user-123", SECRET, ttl=60, now=1_000)
        assert verify_token(token, SECRET, now=1_059) == "user-123"
        with pytest.raises(TokenExpiredError):
            verify_token(token, SECRET, now=1_060)

    def test_wrong_secret(self):
        token = create_token("user-123", SECRET)
        with pytest.raises(InvalidSignatureError):
            verify_token(token, "some-other-secret-entirely-different")

    def test_tampered_payload(self):
        token = create_token("user-123", SECRET, ttl=60)
        encoded, sig = token.split(".")
        payload = json.loads(urlsafe_b64decode(encoded))
        payload["exp"] += 10_000
        forged = urlsafe_b64encode(json.dumps(payload).encode()).decode()
        with pytest.raises(InvalidSignatureError):
            verify_token(forged + "." + sig, SECRET)

    def test_wrong_issuer_is_malformed(self):
        token = create_token("user-123", SECRET, issuer="someone-else")
        with pytest.raises(MalformedTokenError):
            verify_token(token, SECRET)

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c", ".sig", "payload."])
    def test_unparseable(self, token):
        with pytest.raises(MalformedTokenError):
            verify_token(token, SECRET)

    def test_signed_but_not_json(self):
        with pytest.raises(MalformedTokenError):
            verify_token(_signed(b"not json"), SECRET)

    def test_signed_but_missing_subject(self):
        payload = {"iss": "todo-service", "iat": 0, "exp": int(time.time()) + 60}
        with pytest.raises(MalformedTokenError):
            verify_token(_signed(json.dumps(payload).encode()), SECRET)
