"""
Authentication endpoints.
Provides token (login) and self-registration routes.
"""
import logging

from fastapi import APIRouter, Depends, Request

from app.rate_limit import limiter, RATE_LIMIT_LOGIN
from app.schemas import UserAuth, UserRegister
from app.users import UserRepository, get_user_repo
from security.auth import create_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token")
@limiter.limit(RATE_LIMIT_LOGIN)
def login(request: Request, body: UserAuth, users: UserRepository = Depends(get_user_repo)):
    """
    Exchange {username, password} for {token}.
    Returns 401 on invalid credentials.
    """
    client_host = request.client.host if request.client else 'unknown'
    logger.info(f"[auth] Login attempt for {body.username} from {client_host}")

    user = users.authenticate(body.username, body.password)
    return {"token": create_token(user)}


@router.post("/register", status_code=201)
@limiter.limit(RATE_LIMIT_LOGIN)
def register(request: Request, body: UserRegister, users: UserRepository = Depends(get_user_repo)):
    """
    Self-registration. Never creates an admin.
    Returns {token}.
    """
    user = users.register({**body.model_dump(), "isAdmin": False})
    return {"token": create_token(user)}
