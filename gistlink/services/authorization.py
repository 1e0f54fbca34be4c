"""Authorization gate for requests that act on a single user record."""

import logging
import uuid

from gistlink.config import get_settings
from gistlink.errors import DemoAccountError, UnauthorizedError
from gistlink.services.auth import verify_access_token

logger = logging.getLogger(__name__)


def authorize(token: str | None, target_id: uuid.UUID) -> None:
    """Allow the request only if ``token`` is valid and its subject is ``target_id``.

    Missing and invalid tokens raise from :func:`verify_access_token`; a valid
    token for someone else raises UnauthorizedError.
    """
    subject = verify_access_token(token)
    if subject != str(target_id):
        logger.info(f"Token subject {subject} denied access to user {target_id}")
        raise UnauthorizedError()


def is_demo_user(user_id: uuid.UUID) -> bool:
    return str(user_id) == get_settings().demo_user_id


def ensure_not_demo(user_id: uuid.UUID) -> None:
    """Refuse mutations of the pre-seeded demo account."""
    if is_demo_user(user_id):
        raise DemoAccountError()
