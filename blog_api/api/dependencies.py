"""FastAPI dependencies for authentication, storage and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blog_api.config import Settings, get_settings
from blog_api.database import get_db
from blog_api.errors import Unauthenticated
from blog_api.services.auth import CurrentIdentity, TokenService
from blog_api.services.post_service import PostService
from blog_api.services.storage import FileStore
from blog_api.services.user_service import UserService

security = HTTPBearer(auto_error=False)


def get_token_service(settings: Annotated[Settings, Depends(get_settings)]) -> TokenService:
    """Get token service bound to the configured signing secret."""
    return TokenService(settings)


def get_file_store(settings: Annotated[Settings, Depends(get_settings)]) -> FileStore:
    """Get file store rooted at the configured upload directory."""
    return FileStore(settings.upload_dir)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentIdentity:
    """Resolve the caller from the bearer token without touching the database."""
    if credentials is None:
        raise Unauthenticated("Not authorized, no token")

    identity = tokens.resolve_identity(credentials.credentials)
    if identity is None:
        raise Unauthenticated("Not authorized, token failed")

    return identity


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[FileStore, Depends(get_file_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, store, tokens, settings)


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[FileStore, Depends(get_file_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db, store, settings)
