"""
Input validators shared by the request schemas.
"""

from __future__ import annotations

import re
from typing import Pattern

EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72  # bcrypt ignores anything past this


def is_not_empty(*values: str | None) -> bool:
    """True when every value has at least one non-whitespace character."""
    return all(value is not None and value.strip() != "" for value in values)


def min_chars(value: str, n: int) -> bool:
    return len(value) >= n


def matches(value: str, pattern: Pattern[str]) -> bool:
    return pattern.match(value) is not None


def require_not_blank(value: str) -> str:
    if not is_not_empty(value):
        raise ValueError("must not be blank")
    return value


def validate_email(value: str) -> str:
    value = require_not_blank(value).strip()
    if len(value) > 255 or not matches(value, EMAIL_RE):
        raise ValueError("must be a valid email address")
    return value


def validate_password(value: str) -> str:
    """
    Password policy: at least ``PASSWORD_MIN_LENGTH`` characters, at most
    ``PASSWORD_MAX_BYTES`` UTF-8 bytes, and at least one letter and one digit.
    """
    require_not_blank(value)
    if not min_chars(value, PASSWORD_MIN_LENGTH):
        raise ValueError(f"must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(value.encode()) > PASSWORD_MAX_BYTES:
        raise ValueError(f"must be at most {PASSWORD_MAX_BYTES} bytes")
    if not any(ch.isalpha() for ch in value) or not any(ch.isdigit() for ch in value):
        raise ValueError("must contain at least one letter and one digit")
    return value
