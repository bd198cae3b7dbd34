"""Pydantic schemas for API request/response validation."""

from blog_api.schemas.post import PostFields, PostResponse
from blog_api.schemas.user import (
    LoginResponse,
    MessageResponse,
    UserEdit,
    UserIdentity,
    UserLogin,
    UserRegister,
    UserResponse,
)

__all__ = [
    "LoginResponse",
    "MessageResponse",
    "PostFields",
    "PostResponse",
    "UserEdit",
    "UserIdentity",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
