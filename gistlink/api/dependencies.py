"""FastAPI dependencies for services and the request token."""

from typing import Annotated

from fastapi import Cookie, Depends
from sqlalchemy.orm import Session

from gistlink.database import get_db
from gistlink.services.auth import TOKEN_COOKIE
from gistlink.services.gist import GistClient, GistVerifier
from gistlink.services.users import UserService


def get_token(token: Annotated[str | None, Cookie(alias=TOKEN_COOKIE)] = None) -> str | None:
    """Token cookie, if the client sent one."""
    return token


def get_gist_client() -> GistClient:
    """Get gist API client instance."""
    return GistClient()


def get_gist_verifier(
    client: Annotated[GistClient, Depends(get_gist_client)],
) -> GistVerifier:
    return GistVerifier(client)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    gists: Annotated[GistVerifier, Depends(get_gist_verifier)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, gists)
