"""
User endpoints for API v1.

Registration is public; the first registered user becomes the
administrator.  Listing and deleting users is reserved for
administrators.  This API does not issue tokens: operators mint them
with ``create_token.py``.
"""

from typing import List

from fastapi import APIRouter, Depends

from vidly_api.app.api.deps import http_error, path_id
from vidly_api.app.core.exceptions import StoreError
from vidly_api.app.core.security import get_current_user, require_admin
from vidly_api.app.schemas.user import UserCreate, UserRead
from vidly_api.app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=UserRead)
async def register_user(user: UserCreate) -> UserRead:
    """Register a new user.  Answers 400 if the e‑mail is already taken."""
    try:
        return await UserService.create_user(user)
    except StoreError as e:
        raise http_error(e) from e


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: dict = Depends(get_current_user)) -> UserRead:
    """Return the user the token was issued for."""
    try:
        return await UserService.get_user(current_user["user_id"])
    except StoreError as e:
        raise http_error(e) from e


@router.get("", response_model=List[UserRead])
async def list_users(current_user: dict = Depends(require_admin)) -> List[UserRead]:
    return await UserService.list_users()


@router.delete("/{user_id}", response_model=UserRead)
async def delete_user(
    user_id: str,
    current_user: dict = Depends(require_admin),
) -> UserRead:
    try:
        return await UserService.delete_user(path_id(user_id, "user"))
    except StoreError as e:
        raise http_error(e) from e
