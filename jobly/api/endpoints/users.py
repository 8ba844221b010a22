"""
User endpoints.

Listing and creating users is admin only. A user's own record (and their
job applications) is available to that user and to admins.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, ensure_correct_user_or_admin
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.job import AppliedResponse, DeletedResponse
from jobly.schemas.user import (
    UserCreateRequest,
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserTokenResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=UserTokenResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Add a new user. Admin only; unlike /auth/register this can create admins.

    Returns the user and a token for them.
    """
    user = user_crud.register(
        db,
        username=request.username,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        is_admin=request.is_admin,
    )
    logger.info(f"{admin['username']} created user {user['username']}")
    return {"user": user, "token": create_token(user["username"], user["isAdmin"])}


@router.get("", response_model=UserListResponse)
def list_users(
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    """Return a user with the ids of jobs they applied to."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    user = user_crud.update(db, username, request.model_dump(by_alias=True, exclude_unset=True))
    logger.info(f"{current_user['username']} updated user {username}")
    return {"user": user}


@router.delete("/{username}", response_model=DeletedResponse)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    user_crud.remove(db, username)
    logger.info(f"{current_user['username']} deleted user {username}")
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=AppliedResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    """Apply the user to a job."""
    user_crud.apply_to_job(db, username, job_id)
    logger.info(f"{username} applied to job {job_id}")
    return {"applied": job_id}
