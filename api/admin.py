"""
Admin routes. Destructive maintenance, refused outside a dev environment.

Route prefix: /admin
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session, get_settings
from api.errors import AuthorizationError
from config.settings import Settings
from database.helpers import reset_database
from utils.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reset", response_model=MessageResponse)
async def reset(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> Dict[str, str]:
    """Wipe all todos and users. ENV must be ``dev``."""
    if not settings.is_dev:
        logger.warning("Refused database reset in env=%s", settings.env)
        raise AuthorizationError("Reset only allowed on dev")

    await reset_database(session)
    await session.commit()
    return {"message": "Database reset to initial state"}
