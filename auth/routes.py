"""
Auth API routes — register, login.

Route prefix: none (``/register``, ``/login``)
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_password_hasher, get_settings
from api.errors import AuthenticationError, ConflictError, InternalError
from auth.jwt import create_token
from auth.password import HashingError, PasswordHasher
from config.settings import Settings
from database.helpers import DuplicateEmailError, create_user, get_user_by_email
from database.models import User
from utils.schemas import AuthResponse, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _auth_response(user: User, settings: Settings) -> Dict[str, Any]:
    token = create_token(
        str(user.user_id),
        settings.jwt_secret,
        ttl=settings.jwt_expiry_seconds,
        issuer=settings.jwt_issuer,
    )
    return {
        "user_id": str(user.user_id),
        "name": user.name,
        "email": user.email,
        "token": token,
    }


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> Dict[str, Any]:
    """Register a new user and log them straight in."""
    try:
        password_hash = await hasher.hash(req.password)
    except HashingError as exc:
        raise InternalError() from exc

    try:
        user = await create_user(session, req.name, req.email, password_hash)
    except DuplicateEmailError as exc:
        raise ConflictError("Email already exists") from exc
    await session.commit()

    logger.info("Registered user %s (%s)", user.name, user.user_id)
    return _auth_response(user, settings)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> Dict[str, Any]:
    """Login with email + password."""
    user = await get_user_by_email(session, req.email.strip())

    # Same answer, and same bcrypt cost, for unknown email and wrong password.
    if user is None:
        matched = await hasher.verify_dummy(req.password)
    else:
        matched = await hasher.verify(req.password, user.password_hash)
    if not matched:
        raise AuthenticationError("Invalid email or password")

    logger.info("Login: %s (%s)", user.name, user.user_id)
    return _auth_response(user, settings)
