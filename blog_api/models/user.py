"""User model."""

from sqlalchemy import CheckConstraint, Column, Integer, String

from blog_api.database import Base
from blog_api.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """A registered author."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("posts >= 0", name="ck_users_posts_non_negative"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    avatar = Column(String(255), nullable=True)  # filename in the upload dir
    # Denormalized count of posts created by this user
    posts = Column(Integer, nullable=False, default=0, server_default="0")
