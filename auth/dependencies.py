"""
FastAPI dependencies for authentication.

Provides ``extract_bearer_token`` and the ``get_current_user_id``
dependency used across all protected routes.
"""

from __future__ import annotations

import logging
import uuid
from typing import Mapping, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_settings
from api.errors import AuthenticationError
from auth.jwt import TokenError, verify_token
from config.settings import Settings

logger = logging.getLogger(__name__)

_SCHEME = "Bearer "

# Documents the scheme in OpenAPI; the header itself is parsed by extract_bearer_token.
_bearer_scheme = HTTPBearer(auto_error=False)


class AuthorizationHeaderError(Exception):
    """The Authorization header is absent or unusable."""


class MissingAuthorizationError(AuthorizationHeaderError):
    pass


class MalformedAuthorizationError(AuthorizationHeaderError):
    pass


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    The scheme is matched case-sensitively with exactly one space, and the
    remainder must be a single non-empty token.
    """
    authorization = next(
        (value for key, value in headers.items() if key.lower() == "authorization"),
        None,
    )
    if authorization is None:
        raise MissingAuthorizationError("no Authorization header")
    if not authorization.startswith(_SCHEME):
        raise MalformedAuthorizationError("expected Bearer scheme")
    token = authorization[len(_SCHEME):]
    if not token or token != token.strip() or " " in token:
        raise MalformedAuthorizationError("expected 'Bearer <token>'")
    return token


async def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings),
    _credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> uuid.UUID:
    """
    Extract and verify the Bearer token, returning the authenticated
    ``user_id``.  Any failure becomes a 401 before the handler runs.
    """
    try:
        token = extract_bearer_token(request.headers)
        subject = verify_token(token, settings.jwt_secret, issuer=settings.jwt_issuer)
        return uuid.UUID(subject)
    except (AuthorizationHeaderError, TokenError, ValueError) as exc:
        logger.info("Rejected credentials on %s: %s", request.url.path, exc)
        raise AuthenticationError() from exc
