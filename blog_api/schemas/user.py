"""User and authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request.

    Fields are optional at the schema level so that a missing field is
    reported with the same message as an empty one.
    """

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    password2: str | None = Field(None, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserEdit(BaseModel):
    """Profile edit request. Accepts the camelCase keys web clients send."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    current_password: str | None = Field(None, alias="currentPassword", max_length=128)
    new_password: str | None = Field(None, alias="newPassword", max_length=128)
    confirm_new_password: str | None = Field(None, alias="confirmNewPassword", max_length=128)


class UserIdentity(BaseModel):
    """Minimal public identity returned at login."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class LoginResponse(BaseModel):
    token: str
    user: UserIdentity


class UserResponse(BaseModel):
    """Public profile. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    avatar: str | None
    posts: int
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str
