"""Authentication service for password hashing, session tokens and users."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User
from src.schemas.auth import SessionIdentity
from src.services.exceptions import InvalidPayloadError, InvalidTokenError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes count as a mismatch."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh salt."""
    return pwd_context.hash(password)


@lru_cache
def _dummy_password_hash() -> str:
    return get_password_hash("dummy-password-for-timing")


class TokenCodec:
    """Issues and verifies signed, time-limited session tokens.

    Tokens are HMAC-signed JWTs whose claims are the session identity
    (``id``, ``email``, ``name``) plus ``iat`` and ``exp``.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, identity: SessionIdentity, issued_at: datetime | None = None) -> str:
        """Sign an identity into a token that expires ``expires_in`` after ``issued_at``."""
        issued_at = issued_at or datetime.now(UTC)
        to_encode = {
            **identity.model_dump(),
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionIdentity:
        """Verify a token and return the identity it carries.

        Raises:
            InvalidTokenError: Bad signature, expired, or malformed token.
            InvalidPayloadError: Signature is valid but identity fields are missing.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        try:
            return SessionIdentity.model_validate(payload)
        except ValidationError as e:
            raise InvalidPayloadError("Token payload is missing identity fields") from e


@lru_cache
def get_token_codec() -> TokenCodec:
    """Get the process-wide token codec built from settings."""
    settings = get_settings()
    return TokenCodec(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(hours=settings.jwt_expiration_hours),
    )


def identity_for(user: User) -> SessionIdentity:
    """Build the session identity for a user."""
    return SessionIdentity(id=user.id, email=user.email, name=user.name)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    An unknown email still pays for one hash verification so both failure paths
    take about the same time.
    """
    user = get_user_by_email(db, email)
    if not user:
        verify_password(password, _dummy_password_hash())
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, password_hash: str, name: str) -> User:
    """Create a new user from an already hashed password."""
    user = User(email=email, password_hash=password_hash, name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
