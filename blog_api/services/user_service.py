"""User service: registration, login, profiles and avatars."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.config import Settings
from blog_api.errors import Conflict, NotFound, Unauthenticated, ValidationError
from blog_api.models.user import User
from blog_api.schemas.user import UserEdit, UserRegister
from blog_api.services.auth import TokenService, get_password_hash, verify_password
from blog_api.services.storage import FileStore, UploadedAsset

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Invalid credentials"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Service for author accounts."""

    def __init__(self, db: Session, store: FileStore, tokens: TokenService, settings: Settings):
        self.db = db
        self.store = store
        self.tokens = tokens
        self.max_avatar_bytes = settings.max_avatar_bytes

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFound("User not found")
        return user

    def register(self, data: UserRegister) -> User:
        """Create an account. Raises on missing fields, duplicates and weak passwords."""
        if not (data.name and data.email and data.password and data.password2):
            raise ValidationError("Please fill in all fields")

        email = normalize_email(data.email)
        if self.get_user_by_email(email):
            raise Conflict("Email already exists")

        if len(data.password.strip()) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if data.password != data.password2:
            raise ValidationError("Passwords do not match")

        user = User(name=data.name, email=email, password_hash=get_password_hash(data.password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Email already exists") from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user

    def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """Check credentials and issue a token.

        Unknown email and wrong password fail with the same message.
        """
        if not email or not password:
            raise ValidationError("Please fill in all fields")

        user = self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise Unauthenticated(INVALID_CREDENTIALS)

        return self.tokens.create_access_token(user.id, user.name), user

    def change_avatar(self, user_id: int, avatar: UploadedAsset | None) -> User:
        """Replace the user's avatar, removing the previous file."""
        if avatar is None:
            raise ValidationError("Please choose an image")

        user = self.get_user(user_id)

        if avatar.size > self.max_avatar_bytes:
            raise ValidationError("Image size too large")

        previous = user.avatar
        filename = self.store.save(avatar)
        user.avatar = filename
        self.store.commit_with_asset(self.db, filename)
        self.db.refresh(user)

        self.store.discard(previous)
        return user

    def edit_profile(self, user_id: int, data: UserEdit) -> User:
        """Update name, email and password after checking the current password."""
        if not (data.name and data.email and data.current_password and data.new_password):
            raise ValidationError("Please fill in all fields")

        user = self.get_user(user_id)

        email = normalize_email(data.email)
        owner = self.get_user_by_email(email)
        if owner is not None and owner.id != user.id:
            raise Conflict("Email already exists")

        if not verify_password(data.current_password, user.password_hash):
            raise ValidationError("Invalid current password")

        if len(data.new_password.strip()) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if data.new_password != data.confirm_new_password:
            raise ValidationError("New passwords do not match")

        user.name = data.name
        user.email = email
        user.password_hash = get_password_hash(data.new_password)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Email already exists") from None
        self.db.refresh(user)
        return user

    def list_authors(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()
