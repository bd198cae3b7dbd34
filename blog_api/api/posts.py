"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from blog_api.api.dependencies import get_current_identity, get_post_service
from blog_api.schemas.post import PostFields, PostResponse
from blog_api.schemas.user import MessageResponse
from blog_api.services.auth import CurrentIdentity
from blog_api.services.post_service import PostService
from blog_api.services.storage import UploadedAsset

router = APIRouter(prefix="/api/posts", tags=["posts"])


def _asset(upload: UploadFile | None) -> UploadedAsset | None:
    return UploadedAsset.from_upload(upload) if upload is not None else None


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    current_user: Annotated[CurrentIdentity, Depends(get_current_identity)],
    posts: Annotated[PostService, Depends(get_post_service)],
    title: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File(description="Thumbnail, at most 5 MiB")] = None,
):
    """Create a post owned by the current user."""
    fields = PostFields(title=title, category=category, description=description)
    return posts.create_post(current_user.id, fields, _asset(thumbnail))


@router.get("", response_model=list[PostResponse])
def get_posts(posts: Annotated[PostService, Depends(get_post_service)]):
    """Get all posts, most recently updated first."""
    return posts.list_posts()


@router.get("/categories/{category}", response_model=list[PostResponse])
def get_category_posts(category: str, posts: Annotated[PostService, Depends(get_post_service)]):
    """Get posts in one category, newest first."""
    return posts.list_by_category(category)


@router.get("/users/{user_id}", response_model=list[PostResponse])
def get_user_posts(user_id: int, posts: Annotated[PostService, Depends(get_post_service)]):
    """Get posts written by one author, newest first."""
    return posts.list_by_author(user_id)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, posts: Annotated[PostService, Depends(get_post_service)]):
    """Get a single post."""
    return posts.get_post(post_id)


@router.patch("/{post_id}", response_model=PostResponse)
def edit_post(
    post_id: int,
    current_user: Annotated[CurrentIdentity, Depends(get_current_identity)],
    posts: Annotated[PostService, Depends(get_post_service)],
    title: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File(description="Replacement thumbnail")] = None,
):
    """Edit a post. A new thumbnail replaces and removes the old one."""
    fields = PostFields(title=title, category=category, description=description)
    return posts.edit_post(current_user.id, post_id, fields, _asset(thumbnail))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    current_user: Annotated[CurrentIdentity, Depends(get_current_identity)],
    posts: Annotated[PostService, Depends(get_post_service)],
):
    """Delete a post and its thumbnail."""
    posts.delete_post(current_user.id, post_id)
    return MessageResponse(message=f"Post {post_id} deleted successfully")
