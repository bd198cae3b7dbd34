"""Post service: CRUD over posts and their thumbnails."""

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from blog_api.config import Settings
from blog_api.errors import Forbidden, NotFound, ValidationError
from blog_api.models.enums import PostCategory
from blog_api.models.post import Post
from blog_api.models.user import User
from blog_api.schemas.post import PostFields
from blog_api.services.storage import FileStore, UploadedAsset

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 12


def _check_category(category: str) -> None:
    if category not in PostCategory.values():
        raise ValidationError(f"{category} is not a valid category")


class PostService:
    """Service for posts.

    The creator's ``User.posts`` counter is adjusted with a single UPDATE in
    the same transaction as the insert or delete, so concurrent requests by
    one author cannot make it drift.
    """

    def __init__(self, db: Session, store: FileStore, settings: Settings):
        self.db = db
        self.store = store
        self.max_thumbnail_bytes = settings.max_thumbnail_bytes

    def get_post(self, post_id: int) -> Post:
        post = self.db.query(Post).filter(Post.id == post_id).first()
        if post is None:
            raise NotFound("Post not found")
        return post

    def _get_own_post(self, post_id: int, user_id: int, action: str) -> Post:
        post = self.get_post(post_id)
        if post.creator_id != user_id:
            raise Forbidden(f"Only the creator can {action} this post")
        return post

    def _check_thumbnail_size(self, thumbnail: UploadedAsset) -> None:
        if thumbnail.size > self.max_thumbnail_bytes:
            raise ValidationError("File size too large")

    def _adjust_post_count(self, user_id: int, delta: int) -> None:
        stmt = update(User).where(User.id == user_id)
        if delta < 0:
            stmt = stmt.where(User.posts > 0)
        self.db.execute(stmt.values(posts=User.posts + delta))

    def create_post(
        self, user_id: int, fields: PostFields, thumbnail: UploadedAsset | None
    ) -> Post:
        """Store the thumbnail, insert the post and bump the author's counter."""
        if not (fields.title and fields.category and fields.description and thumbnail):
            raise ValidationError("Please fill in all fields")
        _check_category(fields.category)
        self._check_thumbnail_size(thumbnail)

        if self.db.query(User.id).filter(User.id == user_id).first() is None:
            raise NotFound("User not found")

        filename = self.store.save(thumbnail)
        post = Post(
            title=fields.title,
            category=fields.category,
            description=fields.description,
            creator_id=user_id,
            thumbnail=filename,
        )
        self.db.add(post)
        self._adjust_post_count(user_id, +1)
        self.store.commit_with_asset(self.db, filename)
        self.db.refresh(post)

        logger.info(f"User {user_id} created post {post.id}")
        return post

    def list_posts(self) -> list[Post]:
        return self.db.query(Post).order_by(Post.updated_at.desc(), Post.id.desc()).all()

    def list_by_category(self, category: str) -> list[Post]:
        return (
            self.db.query(Post)
            .filter(Post.category == category)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .all()
        )

    def list_by_author(self, user_id: int) -> list[Post]:
        return (
            self.db.query(Post)
            .filter(Post.creator_id == user_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .all()
        )

    def edit_post(
        self,
        user_id: int,
        post_id: int,
        fields: PostFields,
        thumbnail: UploadedAsset | None = None,
    ) -> Post:
        """Update a post's fields and optionally swap its thumbnail.

        The new thumbnail is written before the old one is removed; a failed
        removal is logged and does not fail the request.
        """
        if (
            not fields.title
            or not fields.category
            or len(fields.description or "") < MIN_DESCRIPTION_LENGTH
        ):
            raise ValidationError("Please fill in all fields")
        _check_category(fields.category)

        post = self._get_own_post(post_id, user_id, "edit")
        if thumbnail is not None:
            self._check_thumbnail_size(thumbnail)

        post.title = fields.title
        post.category = fields.category
        post.description = fields.description

        if thumbnail is None:
            self.db.commit()
            self.db.refresh(post)
            return post

        previous = post.thumbnail
        filename = self.store.save(thumbnail)
        post.thumbnail = filename
        self.store.commit_with_asset(self.db, filename)
        self.db.refresh(post)

        self.store.discard(previous)
        return post

    def delete_post(self, user_id: int, post_id: int) -> None:
        """Delete a post, decrement the author's counter and remove the thumbnail."""
        post = self._get_own_post(post_id, user_id, "delete")
        filename = post.thumbnail
        creator_id = post.creator_id

        self.db.delete(post)
        self._adjust_post_count(creator_id, -1)
        self.db.commit()

        self.store.discard(filename)
        logger.info(f"User {user_id} deleted post {post_id}")
