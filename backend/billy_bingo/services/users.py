"""
User Service

Registration, login and profile management on top of the User model.
Uniqueness of name and email is enforced by the database; the lookups before
insert only give a friendlier error in the common case.
"""
import logging
import re
from typing import Any, Dict, List

from tortoise.exceptions import IntegrityError

from ..core.errors import Conflict, NotFound, Unauthenticated, ValidationError
from ..core.security import create_access_token
from ..core.validation import parse_uuid, validate_registration, validate_user_update
from ..models.user import User

logger = logging.getLogger("uvicorn.error")

EMAIL_CONFLICT = "Email already exists"
NAME_CONFLICT = "Username already exists"
INVALID_CREDENTIALS = "Invalid email or password"
UPDATABLE_FIELDS = ("name", "email")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _column_pattern(column: str) -> re.Pattern:
    # sqlite "users.email", postgres "users_email_key" / "Key (email)=", mysql "for key 'email'"
    return re.compile(
        rf"users\.{column}\b|users_{column}_key|key \({column}\)=|key '(?:users\.)?{column}'"
    )


EMAIL_COLUMN_RE = _column_pattern("email")
NAME_COLUMN_RE = _column_pattern("name")


def _conflict_from_integrity(exc: IntegrityError) -> Conflict:
    """
    Map a unique-constraint violation to the field that caused it.

    Only the constraint/column token is matched, never the echoed value, so a
    user named "email1" is still reported as a name conflict.
    """
    text = str(exc).lower()
    if EMAIL_COLUMN_RE.search(text):
        return Conflict(EMAIL_CONFLICT)
    if NAME_COLUMN_RE.search(text):
        return Conflict(NAME_CONFLICT)
    return Conflict("User already exists")


async def _ensure_unique(email: str | None = None, name: str | None = None, exclude_id=None) -> None:
    if email is not None:
        qs = User.filter(email=email)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if await qs.exists():
            raise Conflict(EMAIL_CONFLICT)
    if name is not None:
        qs = User.filter(name=name)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if await qs.exists():
            raise Conflict(NAME_CONFLICT)


async def register_user(name: Any, email: Any, password: Any) -> User:
    """Validate, check uniqueness, hash the password and insert a new user."""
    validate_registration(name, email, password)
    name = name.strip()
    email = normalize_email(email)

    await _ensure_unique(email=email, name=name)

    user = User(name=name, email=email)
    user.set_password(password)
    try:
        await user.save()
    except IntegrityError as e:
        raise _conflict_from_integrity(e) from e
    logger.info("[users] registered user id=%s", user.id)
    return user


async def authenticate(email: Any, password: Any) -> User:
    """
    Return the user for valid credentials.

    Unknown email and wrong password produce the same error so callers cannot
    tell which accounts exist.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")
    user = await User.get_or_none(email=normalize_email(str(email)))
    if not user or not user.check_password(str(password)):
        raise Unauthenticated(INVALID_CREDENTIALS)
    return user


def issue_token(user: User) -> str:
    return create_access_token(str(user.id))


def auth_payload(user: User) -> Dict[str, Any]:
    return {"user": user.to_public(), "token": issue_token(user)}


async def get_user(user_id: Any) -> User:
    uid = parse_uuid(user_id)
    user = await User.get_or_none(id=uid) if uid else None
    if not user:
        raise NotFound("User not found")
    return user


async def list_users() -> List[User]:
    return await User.all().order_by("-created_at")


async def update_user(user: User, changes: Dict[str, Any]) -> User:
    """
    Apply a partial profile update.

    Only name and email are applied. A password in ``changes`` is validated
    like any other field but never written here.
    """
    validate_user_update(changes)

    updates: Dict[str, Any] = {}
    for key in UPDATABLE_FIELDS:
        if key in changes:
            updates[key] = changes[key].strip()
    if "email" in updates:
        updates["email"] = normalize_email(updates["email"])

    if not updates:
        return user

    await _ensure_unique(email=updates.get("email"), name=updates.get("name"), exclude_id=user.id)

    user.update_from_dict(updates)
    try:
        await user.save()
    except IntegrityError as e:
        raise _conflict_from_integrity(e) from e
    return user


async def delete_user(user_id: Any) -> None:
    user = await get_user(user_id)
    await user.delete()
    logger.info("[users] deleted user id=%s", user.id)
