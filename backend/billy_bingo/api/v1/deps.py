# billy_bingo/api/v1/deps.py
import logging

import jwt
from fastapi import Header

from billy_bingo.config import settings
from billy_bingo.core.errors import Unauthenticated
from billy_bingo.core.security import decode_access_token
from billy_bingo.core.validation import parse_uuid
from billy_bingo.models.user import User
from billy_bingo.services.setlistfm import SetlistFmClient
from billy_bingo.services.setlists import SetlistService

logger = logging.getLogger("uvicorn.error")

BEARER_PREFIX = "Bearer "


def _reject(reason: str, message: str) -> Unauthenticated:
    logger.info("[auth] rejected: %s", reason)
    return Unauthenticated(message)


async def get_current_user(
    authorization: str | None = Header(default=None),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Expects ``Authorization: Bearer <token>``. Every failure is a 401; the
    reason (missing, malformed, invalid, expired, unknown user) only differs in
    the message and the log line.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": str(user.id)}
    """
    if not authorization:
        raise _reject("missing header", "Access denied. No token provided.")
    if not authorization.startswith(BEARER_PREFIX):
        raise _reject("malformed header", "Access denied. Invalid token format.")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise _reject("empty token", "Access denied. No token provided.")

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise _reject("expired token", "Access denied. Token expired.")
    except jwt.InvalidTokenError:
        raise _reject("invalid token", "Access denied. Invalid token.")

    user_id = parse_uuid(payload.get("sub"))
    user = await User.get_or_none(id=user_id) if user_id else None
    if not user:
        raise _reject("user not found", "Access denied. User not found.")
    return user


def get_setlist_service() -> SetlistService:
    """
    Build the setlist service from settings.

    Overridden in tests through ``app.dependency_overrides``.
    """
    client = SetlistFmClient.from_settings(settings)
    return SetlistService(client, page_delay=settings.setlist_page_delay)
