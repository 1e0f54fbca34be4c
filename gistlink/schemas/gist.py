"""Gist validation schemas."""

from pydantic import BaseModel


class GistValidationResponse(BaseModel):
    gist_id: str
    files: list[str]
