"""Pydantic schemas for API requests and responses."""

from gistlink.schemas.auth import LoggedInUser, LoginResponse, UserLogin
from gistlink.schemas.gist import GistValidationResponse
from gistlink.schemas.lookup import CategoryResponse, FileResponse, FileTypeResponse
from gistlink.schemas.user import NewUserResponse, UserPublic, UserResponse

__all__ = [
    "UserLogin",
    "LoggedInUser",
    "LoginResponse",
    "UserPublic",
    "UserResponse",
    "NewUserResponse",
    "CategoryResponse",
    "FileTypeResponse",
    "FileResponse",
    "GistValidationResponse",
]
