"""Password hashing, JWT issuing/verification and the token cookie."""

import time
from datetime import timedelta

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from gistlink.config import get_settings
from gistlink.errors import InvalidTokenError, MissingTokenError

settings = get_settings()

TOKEN_COOKIE = "token"  # noqa: S105

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognized or corrupt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh salt."""
    return pwd_context.hash(password)


def token_ttl() -> timedelta:
    return timedelta(minutes=settings.jwt_expiration_minutes)


def create_access_token(user_id: object, expires_in: timedelta | None = None) -> str:
    """Create a JWT binding ``sub`` to the user id.

    A zero ``expires_in`` yields a token that is already expired.
    """
    if expires_in is None:
        expires_in = token_ttl()
    to_encode = {
        "sub": str(user_id),
        "exp": int(time.time()) + int(expires_in.total_seconds()),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str | None) -> str:
    """Return the token subject.

    Raises MissingTokenError when no token was sent and InvalidTokenError for
    every other failure, expiry included.
    """
    if not token:
        raise MissingTokenError()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError() from e

    subject = payload.get("sub")
    expires_at = payload.get("exp")
    if not isinstance(subject, str) or not isinstance(expires_at, int):
        raise InvalidTokenError()
    # exp is exclusive: a token is dead from its expiry second on
    if expires_at <= time.time():
        raise InvalidTokenError()
    return subject


def set_token_cookie(response: Response, user_id: object) -> None:
    """Issue a token for the user and attach it as an httpOnly cookie."""
    max_age = int(token_ttl().total_seconds())
    response.set_cookie(
        TOKEN_COOKIE,
        create_access_token(user_id),
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
    )


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(TOKEN_COOKIE, httponly=True, secure=settings.is_production)
