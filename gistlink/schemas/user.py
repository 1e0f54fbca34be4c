"""User schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserPublic(BaseModel):
    """Projection of a user that anyone may list."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    name: str | None


class UserResponse(BaseModel):
    """Full user record as seen by its owner. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    gist_id: str | None
    name: str | None
    email: str
    username: str
    created_at: datetime
    updated_at: datetime


class NewUserResponse(BaseModel):
    new_user: str
