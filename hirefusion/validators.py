"""
Input rules shared by the signup schema, the standalone username check and
the saved-job endpoints.

Each ``validate_*`` function returns a list of human-readable problems; an
empty list means the value is acceptable.
"""
from __future__ import annotations

import re
import uuid

USERNAME_MIN, USERNAME_MAX = 3, 20
PASSWORD_MIN, PASSWORD_MAX = 8, 20

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]*$")
# the saved-job endpoints match this exact pattern; signup goes through EmailStr
EMAIL_RE = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,4}$")
PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_username(username: str | None) -> list[str]:
    if not username:
        return ["Username is required"]
    errors = []
    if len(username) < USERNAME_MIN:
        errors.append(f"Username must be at least {USERNAME_MIN} characters long")
    if len(username) > USERNAME_MAX:
        errors.append(f"Username must be at most {USERNAME_MAX} characters long")
    if not USERNAME_RE.match(username):
        errors.append("Username can only contain letters, numbers and underscore")
    return errors


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_password(password: str | None) -> list[str]:
    if not password:
        return ["Password is required"]
    errors = []
    if len(password) < PASSWORD_MIN:
        errors.append(f"Password must be at least {PASSWORD_MIN} characters long")
    if len(password) > PASSWORD_MAX:
        errors.append(f"Password must be at most {PASSWORD_MAX} characters long")
    if not PASSWORD_RE.match(password):
        errors.append(
            "Password must contain at least 8 characters, including UPPER/lowercase, "
            "numbers, and a special character"
        )
    return errors


def is_valid_id(value) -> bool:
    """True for a canonical UUID string, the identifier format of every entity."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False
