"""Request body and path parameter validation for user operations.

Bodies arrive as plain JSON objects. Each operation declares the keys it
accepts in a :class:`BodySchema`; the checks below compare the body against
it and collect every offending key into one error.
"""

import re
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from gistlink.errors import ValidationError

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
WHITESPACE_PATTERN = re.compile(r"\s")
USERNAME_MAX_LENGTH = 36

CURRENT_PASSWORD = "currentPassword"  # noqa: S105


@dataclass(frozen=True)
class BodySchema:
    """Keys an operation accepts, and how unknown keys are reported."""

    required: tuple[str, ...]
    optional: tuple[str, ...]
    unknown_label: str

    @property
    def allowed(self) -> tuple[str, ...]:
        return self.required + self.optional


CREATE_SCHEMA = BodySchema(
    required=("gist_id", "username", "email", "password"),
    optional=("name",),
    unknown_label="Extra fields",
)

UPDATE_SCHEMA = BodySchema(
    required=(),
    optional=("name", "username", "email", "gist_id", "password", CURRENT_PASSWORD),
    unknown_label="Invalid fields",
)


def _field_list(label: str, fields: Iterable[str]) -> str:
    return f"{label}: {', '.join(fields)}"


def parse_user_id(raw_id: str) -> uuid.UUID:
    """Parse a path id, rejecting anything but a canonical hyphenated UUID."""
    if not UUID_PATTERN.fullmatch(raw_id):
        raise ValidationError(f"Invalid UUID '{raw_id}'")
    return uuid.UUID(raw_id)


def check_body_present(body: Mapping[str, Any] | None, ignore: Iterable[str] = ()) -> None:
    """Reject an absent body, or one holding only ``ignore`` keys."""
    ignored = set(ignore)
    if not body or all(key in ignored for key in body):
        raise ValidationError("No body")


def check_required_fields(body: Mapping[str, Any], schema: BodySchema) -> None:
    missing = [field for field in schema.required if field not in body]
    if missing:
        raise ValidationError(_field_list("Missing fields", missing))


def check_unknown_fields(body: Mapping[str, Any], schema: BodySchema) -> None:
    unknown = [key for key in body if key not in schema.allowed]
    if unknown:
        raise ValidationError(_field_list(schema.unknown_label, unknown))


def check_field_formats(body: Mapping[str, Any]) -> None:
    """Check value types and formats of whichever account fields are present."""
    if "name" in body and body["name"] is not None and not isinstance(body["name"], str):
        raise ValidationError("Invalid value for 'name'")

    if "gist_id" in body and body["gist_id"] is not None and not isinstance(body["gist_id"], str):
        raise ValidationError("Invalid value for 'gist_id'")

    if "email" in body:
        email = body["email"]
        if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
            raise ValidationError(f"Invalid email '{email}'")

    if "username" in body:
        username = body["username"]
        if (
            not isinstance(username, str)
            or not username
            or len(username) > USERNAME_MAX_LENGTH
            or WHITESPACE_PATTERN.search(username)
        ):
            raise ValidationError(f"Invalid username '{username}'")

    if "password" in body:
        password = body["password"]
        if not isinstance(password, str) or not password:
            raise ValidationError("Invalid value for 'password'")


def validate_create_body(body: Mapping[str, Any] | None) -> None:
    check_body_present(body)
    check_required_fields(body, CREATE_SCHEMA)
    check_unknown_fields(body, CREATE_SCHEMA)
    check_field_formats(body)


def validate_update_body(body: Mapping[str, Any] | None) -> None:
    # currentPassword confirms the change; on its own it is not an update
    check_body_present(body, ignore=(CURRENT_PASSWORD,))
    check_unknown_fields(body, UPDATE_SCHEMA)
    check_field_formats(body)
