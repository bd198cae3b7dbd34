"""Authentication service for JWT and password handling."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from blog_api.config import Settings

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pwd_context.hash(password)


@dataclass(frozen=True)
class CurrentIdentity:
    """Identity carried by a verified access token."""

    id: int
    name: str


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.lifetime = timedelta(minutes=settings.jwt_expiration_minutes)

    def create_access_token(
        self, user_id: int, name: str, issued_at: datetime | None = None
    ) -> str:
        """Create a JWT access token for the given user."""
        issued_at = issued_at or datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "id": user_id,
            "name": name,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> dict | None:
        """Decode and validate a JWT token. Returns None when it is invalid or expired."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None

    def resolve_identity(self, token: str) -> CurrentIdentity | None:
        payload = self.decode_access_token(token)
        if payload is None:
            return None
        try:
            return CurrentIdentity(id=int(payload["id"]), name=str(payload.get("name", "")))
        except (KeyError, TypeError, ValueError):
            return None
