"""
User endpoints.

Listing and creating users is admin-only. A user may read, change and
delete their own record and apply to jobs; admins may do so for anyone.
"""
from fastapi import APIRouter, Depends

from app.errors import ForbiddenError
from app.schemas import UserNew, UserUpdate
from app.users import UserRepository, get_user_repo
from security.auth import create_token, ensure_admin, ensure_admin_or_self

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_user(body: UserNew, users: UserRepository = Depends(get_user_repo)):
    """
    Admin-only registration; unlike /auth/register this may create admins.
    Returns {user, token}.
    """
    user = users.register(body.model_dump())
    return {"user": user, "token": create_token(user)}


@router.get("", dependencies=[Depends(ensure_admin)])
def list_users(users: UserRepository = Depends(get_user_repo)):
    return {"users": users.find_all()}


@router.get("/{username}", dependencies=[Depends(ensure_admin_or_self)])
def get_user(username: str, users: UserRepository = Depends(get_user_repo)):
    """Returns {user: {username, firstName, lastName, email, isAdmin, jobs}}"""
    return {"user": users.get(username)}


@router.patch("/{username}")
def update_user(
    username: str,
    body: UserUpdate,
    current_user: dict = Depends(ensure_admin_or_self),
    users: UserRepository = Depends(get_user_repo),
):
    """Partial update of {firstName, lastName, password, email}; isAdmin is admin-only."""
    data = body.model_dump(exclude_unset=True)
    if "isAdmin" in data and not current_user.get("isAdmin"):
        raise ForbiddenError("Only admins may change isAdmin")
    user = users.update(username, data)
    return {"user": user}


@router.delete("/{username}", dependencies=[Depends(ensure_admin_or_self)])
def delete_user(username: str, users: UserRepository = Depends(get_user_repo)):
    users.remove(username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", dependencies=[Depends(ensure_admin_or_self)])
def apply_to_job(username: str, job_id: int, users: UserRepository = Depends(get_user_repo)):
    users.apply_to_job(username, job_id)
    return {"applied": job_id}
