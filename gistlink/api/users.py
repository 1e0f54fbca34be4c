"""User API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response, status

from gistlink.api.dependencies import get_token, get_user_service
from gistlink.schemas.user import NewUserResponse, UserPublic, UserResponse
from gistlink.services.auth import clear_token_cookie, set_token_cookie
from gistlink.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])

JsonBody = Annotated[dict[str, Any] | None, Body()]
Token = Annotated[str | None, Depends(get_token)]
Users = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserPublic])
def get_users(service: Users):
    """List every user's public profile."""
    return service.list_users()


@router.post("", response_model=NewUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(response: Response, service: Users, body: JsonBody = None):
    """Sign up and receive a token cookie."""
    user = await service.create_user(body)
    set_token_cookie(response, user.id)
    return NewUserResponse(new_user=user.username)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, token: Token, service: Users):
    """Get your own full record."""
    return service.get_user(user_id, token)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, token: Token, service: Users, body: JsonBody = None):
    """Update your own record. Requires ``currentPassword`` in the body."""
    return await service.update_user(user_id, token, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str, response: Response, token: Token, service: Users, body: JsonBody = None
):
    """Delete your own account. Requires ``currentPassword`` in the body."""
    service.delete_user(user_id, token, body)
    clear_token_cookie(response)
