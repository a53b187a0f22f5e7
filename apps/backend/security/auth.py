"""
JWT bearer authentication and role checks.

authenticate_jwt never fails: a missing or bad token just means an anonymous
caller. The ensure_* dependencies are what actually gate routes.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request

from app.config import get_secret_key
from app.errors import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


def create_token(user: dict) -> str:
    """Signed token carrying {username, isAdmin}."""
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": int(datetime.now(timezone.utc).timestamp()),
    }
    return jwt.encode(payload, get_secret_key(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Return the token payload, or None if it is invalid."""
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug(f"[auth] Rejected token: {e}")
        return None


def extract_bearer(request: Request) -> Optional[str]:
    auth_header = request.headers.get("authorization")
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def authenticate_jwt(request: Request) -> Optional[dict]:
    """
    FastAPI dependency returning the current user payload, or None.
    The payload is cached on request.state for the other dependencies.
    """
    if hasattr(request.state, "user"):
        return request.state.user

    token = extract_bearer(request)
    user = decode_token(token) if token else None
    request.state.user = user
    return user


def ensure_logged_in(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """Raises 401 if nobody is logged in."""
    if not user:
        raise UnauthorizedError()
    return user


def ensure_admin(user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """Raises 401 for anonymous callers and 403 for non-admins."""
    if not user:
        raise UnauthorizedError()
    if not user.get("isAdmin"):
        raise ForbiddenError()
    return user


def ensure_admin_or_self(username: str, user: Optional[dict] = Depends(authenticate_jwt)) -> dict:
    """
    Allow admins, or the user named by the {username} path parameter.
    Raises 401 for anonymous callers and 403 for anyone else.
    """
    if not user:
        raise UnauthorizedError()
    if not (user.get("isAdmin") or user.get("username") == username):
        raise ForbiddenError()
    return user
