"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from gistlink.api.dependencies import get_user_service
from gistlink.errors import InvalidCredentialsError
from gistlink.schemas.auth import LoggedInUser, LoginResponse, UserLogin
from gistlink.services.auth import clear_token_cookie, set_token_cookie
from gistlink.services.users import UserService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    response: Response,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Login with username and password; the token is set as a cookie."""
    user = service.authenticate(credentials.username, credentials.password)
    if not user:
        raise InvalidCredentialsError()

    set_token_cookie(response, user.id)
    return LoginResponse(user=LoggedInUser.model_validate(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    """Clear the token cookie."""
    clear_token_cookie(response)
