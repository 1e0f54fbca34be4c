"""Gist validation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from gistlink.api.dependencies import get_gist_verifier
from gistlink.schemas.gist import GistValidationResponse
from gistlink.services.gist import GistVerifier

router = APIRouter(prefix="/validateGist", tags=["gists"])


@router.get("/{gist_id}", response_model=GistValidationResponse)
async def validate_gist(
    gist_id: str,
    verifier: Annotated[GistVerifier, Depends(get_gist_verifier)],
):
    """Check that a gist exists and can be linked to an account."""
    files = await verifier.verify(gist_id)
    return GistValidationResponse(gist_id=gist_id, files=files)
