"""
JWT-style token creation and verification.

Tokens are a URL-safe base64 JSON payload and an HMAC-SHA256 hex
signature joined by a dot.  The payload carries ``sub`` (user id),
``iss`` (issuer tag), ``iat`` and ``exp`` (unix seconds); the signature
covers the whole encoded payload, so none of it can be altered without
the secret.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

DEFAULT_ISSUER = "todo-service"
DEFAULT_TTL_SECONDS = 3600


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


def _sign(secret: str, raw: bytes) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: str,
    secret: str,
    ttl: int = DEFAULT_TTL_SECONDS,
    issuer: str = DEFAULT_ISSUER,
    now: Optional[float] = None,
) -> str:
    """Create a signed token for ``user_id`` valid for ``ttl`` seconds."""
    issued_at = int(time.time() if now is None else now)
    payload = {
        "sub": str(user_id),
        "iss": issuer,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    raw = urlsafe_b64encode(json.dumps(payload, separators=(",", ":")).encode())
    return raw.decode() + "." + _sign(secret, raw)


def verify_token(
    token: str,
    secret: str,
    issuer: str = DEFAULT_ISSUER,
    now: Optional[float] = None,
) -> str:
    """
    Verify token and return the ``sub`` claim (user id).

    Raises ``MalformedTokenError``, ``InvalidSignatureError`` or
    ``TokenExpiredError``.
    """
    parts = token.split(".")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedTokenError("bad format")
    encoded, signature = parts

    if not hmac.compare_digest(signature.encode(), _sign(secret, encoded.encode()).encode()):
        raise InvalidSignatureError("bad signature")

    try:
        payload = json.loads(urlsafe_b64decode(encoded.encode()))
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("undecodable payload") from exc
    if not isinstance(payload, dict):
        raise MalformedTokenError("payload is not an object")

    if payload.get("iss") != issuer:
        raise MalformedTokenError("unexpected issuer")
    subject = payload.get("sub")
    expires_at = payload.get("exp")
    if not isinstance(subject, str) or not subject or not isinstance(expires_at, int):
        raise MalformedTokenError("missing claims")

    current = time.time() if now is None else now
    if current >= expires_at:
        raise TokenExpiredError("token expired")
    return subject
