"""
Todo API routes. Every endpoint requires a Bearer token.

Route prefix: /todos
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import db_session
from api.errors import AuthorizationError, NotFoundError
from auth.dependencies import get_current_user_id
from database.helpers import (
    count_todos,
    create_todo,
    delete_todo,
    get_todo,
    list_todos,
    update_todo,
)
from database.models import Todo
from utils.schemas import TodoListResponse, TodoRequest, TodoResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = 1_000_000  # keeps (page - 1) * limit well inside a BIGINT offset


def _parse_int(value: Optional[str]) -> Optional[int]:
    """Lenient query-string integer; anything unparseable counts as absent."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def clamp_pagination(page: Optional[int], limit: Optional[int]) -> tuple[int, int]:
    """
    Page below 1 becomes 1 and above ``MAX_PAGE`` becomes ``MAX_PAGE``;
    limit below 1 becomes the default, above the max becomes the max.
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE
    elif page > MAX_PAGE:
        page = MAX_PAGE
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    elif limit > MAX_LIMIT:
        limit = MAX_LIMIT
    return page, limit


async def _load_owned_todo(session: AsyncSession, todo_id: uuid.UUID, user_id: uuid.UUID) -> Todo:
    """
    Fetch a todo and confirm the caller owns it.

    Someone else's todo is a 403, checked before any write is issued.
    """
    todo = await get_todo(session, todo_id)
    if todo is None:
        raise NotFoundError("ToDo")
    if todo.user_id != user_id:
        logger.warning("User %s denied access to todo %s", user_id, todo_id)
        raise AuthorizationError()
    return todo


@router.get("", response_model=TodoListResponse)
async def list_user_todos(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Dict[str, Any]:
    """Page through the caller's todos, newest first."""
    page_no, limit_no = clamp_pagination(_parse_int(page), _parse_int(limit))
    offset = (page_no - 1) * limit_no

    todos = await list_todos(session, user_id, limit=limit_no, offset=offset)
    total = await count_todos(session, user_id)

    return {
        "data": [TodoResponse.model_validate(t) for t in todos],
        "page": page_no,
        "limit": limit_no,
        "total": total,
    }


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_user_todo(
    req: TodoRequest,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> TodoResponse:
    todo = await create_todo(session, req.title, req.description, user_id)
    await session.commit()
    logger.debug("User %s created todo %s", user_id, todo.todo_id)
    return TodoResponse.model_validate(todo)


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_user_todo(
    todo_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> TodoResponse:
    todo = await _load_owned_todo(session, todo_id, user_id)
    return TodoResponse.model_validate(todo)


@router.put("/{todo_id}", response_model=TodoResponse)
async def update_user_todo(
    todo_id: uuid.UUID,
    req: TodoRequest,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> TodoResponse:
    await _load_owned_todo(session, todo_id, user_id)

    # Deleted since the ownership check: same outcome as never existing.
    updated = await update_todo(session, todo_id, user_id, req.title, req.description)
    if updated is None:
        raise NotFoundError("ToDo")
    await session.commit()
    return TodoResponse.model_validate(updated)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_todo(
    todo_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> Response:
    await _load_owned_todo(session, todo_id, user_id)

    if not await delete_todo(session, todo_id, user_id):
        raise NotFoundError("ToDo")
    await session.commit()
    logger.debug("User %s deleted todo %s", user_id, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
