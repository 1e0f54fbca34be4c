"""Authentication schemas."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class UserLogin(BaseModel):
    """Login request."""

    username: str = Field(..., min_length=1, max_length=36)
    password: str = Field(..., min_length=1)


class LoggedInUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str


class LoginResponse(BaseModel):
    user: LoggedInUser
