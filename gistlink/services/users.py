"""User account lifecycle: create, read, update and delete.

Every operation runs its checks in a fixed order and stops at the first
failure. For a record operation the order is: id shape, existence, token and
ownership, demo lockout, body shape, current password, uniqueness, gist. Each
step is a method below so the order reads directly off the operation.
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from gistlink.errors import (
    ConflictError,
    InvalidCurrentPasswordError,
    MissingCurrentPasswordError,
    NotFoundError,
)
from gistlink.models.user import User
from gistlink.services.auth import get_password_hash, verify_password
from gistlink.services.authorization import authorize, ensure_not_demo
from gistlink.services.gist import GistVerifier
from gistlink.services.validators import (
    CURRENT_PASSWORD,
    parse_user_id,
    validate_create_body,
    validate_update_body,
)

logger = logging.getLogger(__name__)

# Checked in this order; the first conflict wins
UNIQUE_FIELDS = ("email", "username", "gist_id")

# Body keys copied straight onto the row
PROFILE_FIELDS = ("name", "username", "email", "gist_id")


class UserService:
    """Service for user account operations."""

    def __init__(self, db: Session, gists: GistVerifier):
        self.db = db
        self.gists = gists

    # -- stages ---------------------------------------------------------

    def load_user(self, raw_id: str) -> User:
        """Resolve a path id to its row, or fail on a bad or unknown id."""
        user_id = parse_user_id(raw_id)
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(f"No user with ID '{raw_id}'")
        return user

    def load_owned_user(self, raw_id: str, token: str | None) -> User:
        user = self.load_user(raw_id)
        authorize(token, user.id)
        return user

    def check_unique(self, body: Mapping[str, Any], exclude_id: uuid.UUID | None = None) -> None:
        """Raise ConflictError for the first unique field whose value another row holds."""
        for field in UNIQUE_FIELDS:
            if field not in body or body[field] is None:
                continue
            query = self.db.query(User.id).filter(getattr(User, field) == body[field])
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            if query.first() is not None:
                raise ConflictError.for_field(field, body[field])

    @staticmethod
    def confirm_current_password(user: User, body: Mapping[str, Any] | None) -> None:
        current = (body or {}).get(CURRENT_PASSWORD)
        if not current:
            raise MissingCurrentPasswordError()
        if not isinstance(current, str) or not verify_password(current, user.hashed_pwd):
            raise InvalidCurrentPasswordError()

    def _commit(self, body: Mapping[str, Any], exclude_id: uuid.UUID | None = None) -> None:
        """Commit, reporting a lost uniqueness race as a conflict."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Unique constraint hit at commit: {e.orig}")
            self.check_unique(body, exclude_id)
            raise ConflictError("User already exists") from e

    # -- operations -----------------------------------------------------

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at, User.username).all()

    def get_user(self, raw_id: str, token: str | None) -> User:
        return self.load_owned_user(raw_id, token)

    async def create_user(self, body: Mapping[str, Any] | None) -> User:
        """Create an account. Open to unauthenticated callers.

        Store queries and hashing run in the threadpool; only the gist lookup
        awaits on the event loop.
        """
        validate_create_body(body)
        await run_in_threadpool(self.check_unique, body)
        await self.gists.verify(body["gist_id"])
        return await run_in_threadpool(self._insert_user, body)

    def _insert_user(self, body: Mapping[str, Any]) -> User:
        user = User(
            gist_id=body["gist_id"],
            name=body.get("name"),
            email=body["email"],
            username=body["username"],
            hashed_pwd=get_password_hash(body["password"]),
        )
        self.db.add(user)
        self._commit(body)
        self.db.refresh(user)
        logger.info(f"Created user {user.username} ({user.id})")
        return user

    async def update_user(
        self, raw_id: str, token: str | None, body: Mapping[str, Any] | None
    ) -> User:
        """Update the caller's own account after re-confirming their password."""
        user = await run_in_threadpool(self._check_update, raw_id, token, body)
        if "gist_id" in body and body["gist_id"] != user.gist_id:
            await self.gists.verify(body["gist_id"])
        return await run_in_threadpool(self._apply_update, user, body)

    def _check_update(self, raw_id: str, token: str | None, body: Mapping[str, Any] | None) -> User:
        user = self.load_owned_user(raw_id, token)
        ensure_not_demo(user.id)
        validate_update_body(body)
        self.confirm_current_password(user, body)
        self.check_unique(body, exclude_id=user.id)
        return user

    def _apply_update(self, user: User, body: Mapping[str, Any]) -> User:
        for field in PROFILE_FIELDS:
            if field in body:
                setattr(user, field, body[field])
        if "password" in body:
            user.hashed_pwd = get_password_hash(body["password"])
        user.touch()

        self._commit(body, exclude_id=user.id)
        self.db.refresh(user)
        logger.info(f"Updated user {user.id}")
        return user

    def delete_user(self, raw_id: str, token: str | None, body: Mapping[str, Any] | None) -> None:
        """Remove the caller's own account after re-confirming their password."""
        user = self.load_owned_user(raw_id, token)
        ensure_not_demo(user.id)
        self.confirm_current_password(user, body)

        self.db.delete(user)
        self.db.commit()
        logger.info(f"Deleted user {raw_id}")

    def authenticate(self, username: str, password: str) -> User | None:
        """Return the user if the credentials match."""
        user = self.db.query(User).filter(User.username == username).first()
        if not user:
            return None
        if not verify_password(password, user.hashed_pwd):
            return None
        return user
