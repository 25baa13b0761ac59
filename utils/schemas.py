"""
Pydantic schemas for requests and responses.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from utils.validators import require_not_blank, validate_email, validate_password


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    name: str = Field(..., max_length=128)
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        return require_not_blank(v).strip()

    @field_validator("email")
    @classmethod
    def _email_valid(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def _password_policy(cls, v: str) -> str:
        return validate_password(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return require_not_blank(v)


class AuthResponse(BaseModel):
    user_id: str
    name: str
    email: str
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Todos
# ═══════════════════════════════════════════════════════════════════════════════


class TodoRequest(BaseModel):
    """Body for both create and update; both fields are required."""

    title: str = Field(..., max_length=255)
    description: str

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return require_not_blank(v)


class TodoResponse(BaseModel):
    """Public view of a todo; the owner id is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(validation_alias=AliasChoices("todo_id", "id"))
    title: str
    description: str
    created_at: datetime
    updated_at: datetime


class TodoListResponse(BaseModel):
    data: List[TodoResponse]
    page: int
    limit: int
    total: int


class MessageResponse(BaseModel):
    message: str
