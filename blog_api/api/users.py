"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from blog_api.api.dependencies import get_current_identity, get_user_service
from blog_api.schemas.user import (
    LoginResponse,
    MessageResponse,
    UserEdit,
    UserIdentity,
    UserLogin,
    UserRegister,
    UserResponse,
)
from blog_api.services.auth import CurrentIdentity
from blog_api.services.storage import UploadedAsset
from blog_api.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user. The created record is not echoed back."""
    user = users.register(user_data)
    return MessageResponse(message=f"New user {user.email} registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    token, user = users.login(credentials.email, credentials.password)
    return LoginResponse(token=token, user=UserIdentity.model_validate(user))


@router.get("", response_model=list[UserResponse])
def get_authors(users: Annotated[UserService, Depends(get_user_service)]):
    """List every author."""
    return users.list_authors()


@router.post("/change-avatar", response_model=UserResponse)
def change_avatar(
    current_user: Annotated[CurrentIdentity, Depends(get_current_identity)],
    users: Annotated[UserService, Depends(get_user_service)],
    avatar: Annotated[UploadFile | None, File(description="Avatar image, at most 1 MiB")] = None,
):
    """Replace the current user's avatar."""
    asset = UploadedAsset.from_upload(avatar) if avatar is not None else None
    return users.change_avatar(current_user.id, asset)


@router.patch("/edit-user", response_model=UserResponse)
def edit_user(
    user_data: UserEdit,
    current_user: Annotated[CurrentIdentity, Depends(get_current_identity)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Update the current user's name, email and password."""
    return users.edit_profile(current_user.id, user_data)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, users: Annotated[UserService, Depends(get_user_service)]):
    """Get a user's public profile."""
    return users.get_user(user_id)
