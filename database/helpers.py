"""
Database helper functions — the persistence layer behind the route handlers.

Every todo write is scoped by both ``todo_id`` and the owner's
``user_id``; callers are still expected to have checked ownership first.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Todo, User

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """A user with this email already exists."""


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


# ── Users ──────────────────────────────────────────────────────────────


async def create_user(
    session: AsyncSession,
    name: str,
    email: str,
    password_hash: str,
) -> User:
    """Insert a user; raises ``DuplicateEmailError`` on the email unique key."""
    user = User(user_id=uuid.uuid4(), name=name, email=email, password_hash=password_hash)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateEmailError(email) from exc
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


# ── Todos ──────────────────────────────────────────────────────────────


async def create_todo(
    session: AsyncSession,
    title: str,
    description: str,
    user_id: str | uuid.UUID,
) -> Todo:
    now = datetime.now(timezone.utc)
    todo = Todo(
        todo_id=uuid.uuid4(),
        user_id=_to_uuid(user_id),
        title=title,
        description=description,
        created_at=now,
        updated_at=now,
    )
    session.add(todo)
    await session.flush()
    return todo


async def get_todo(session: AsyncSession, todo_id: str | uuid.UUID) -> Optional[Todo]:
    """Unscoped lookup by id, used for the explicit ownership check."""
    result = await session.execute(select(Todo).where(Todo.todo_id == _to_uuid(todo_id)))
    return result.scalar_one_or_none()


async def update_todo(
    session: AsyncSession,
    todo_id: str | uuid.UUID,
    user_id: str | uuid.UUID,
    title: str,
    description: str,
) -> Optional[Todo]:
    """Owner-scoped update. Returns ``None`` when no row matched."""
    tid, uid = _to_uuid(todo_id), _to_uuid(user_id)
    result = await session.execute(
        update(Todo)
        .where(Todo.todo_id == tid, Todo.user_id == uid)
        .values(
            title=title,
            description=description,
            updated_at=datetime.now(timezone.utc),
        )
        .execution_options(synchronize_session="fetch")
    )
    if result.rowcount == 0:
        return None
    refreshed = await session.execute(
        select(Todo)
        .where(Todo.todo_id == tid, Todo.user_id == uid)
        .execution_options(populate_existing=True)
    )
    return refreshed.scalar_one_or_none()


async def delete_todo(
    session: AsyncSession,
    todo_id: str | uuid.UUID,
    user_id: str | uuid.UUID,
) -> bool:
    """Owner-scoped delete. Returns ``False`` when no row matched."""
    result = await session.execute(
        delete(Todo).where(
            Todo.todo_id == _to_uuid(todo_id),
            Todo.user_id == _to_uuid(user_id),
        )
    )
    return result.rowcount > 0


async def list_todos(
    session: AsyncSession,
    user_id: str | uuid.UUID,
    limit: int,
    offset: int,
) -> List[Todo]:
    result = await session.execute(
        select(Todo)
        .where(Todo.user_id == _to_uuid(user_id))
        .order_by(Todo.created_at.desc(), Todo.todo_id)
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())


async def count_todos(session: AsyncSession, user_id: str | uuid.UUID) -> int:
    result = await session.execute(
        select(func.count()).select_from(Todo).where(Todo.user_id == _to_uuid(user_id))
    )
    return result.scalar_one()


# ── Maintenance ────────────────────────────────────────────────────────


async def reset_database(session: AsyncSession) -> None:
    """Delete every todo and user. Only reachable in a dev environment."""
    await session.execute(delete(Todo))
    await session.execute(delete(User))
    await session.flush()
    logger.warning("Database reset: all todos and users deleted")
