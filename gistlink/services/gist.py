"""GitHub gist lookup and the policy a gist must meet to be linked to an account."""

import logging

import httpx

from gistlink.config import get_settings
from gistlink.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class GistLookupError(Exception):
    """The gist API could not be reached or answered with an error."""


class GistClient:
    """Client for the GitHub gists API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = base_url or settings.github_api_url
        self.token = token if token is not None else settings.github_token
        self.timeout = timeout or settings.gist_timeout_seconds
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch_gist_files(self, gist_id: str | None) -> list[str]:
        """Return the filenames of a gist, or ``[]`` for a null id or unknown gist."""
        if not gist_id:
            return []
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.get(f"/gists/{gist_id}")
                if response.status_code == httpx.codes.NOT_FOUND:
                    return []
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching gist {gist_id}: {e}")
            raise GistLookupError(str(e)) from e
        except ValueError as e:
            logger.error(f"Unreadable gist response for {gist_id}: {e}")
            raise GistLookupError(str(e)) from e

        if not isinstance(data, dict):
            raise GistLookupError(f"Unexpected gist payload for {gist_id}")
        return list(data.get("files") or {})


class GistVerifier:
    """Accepts a gist id only if the gist exists and holds the marker file."""

    def __init__(self, client: GistClient, marker_file: str | None = None) -> None:
        self.client = client
        self.marker_file = marker_file or get_settings().gist_marker_file

    async def verify(self, gist_id: str | None) -> list[str]:
        """Return the gist's filenames, or raise why it cannot be linked."""
        if not gist_id:
            raise ValidationError("No gist ID provided")

        try:
            files = await self.client.fetch_gist_files(gist_id)
        except GistLookupError as e:
            raise UpstreamError("Gist lookup failed") from e

        if not files:
            raise UpstreamError("No gist with that ID")
        if self.marker_file not in files:
            logger.info(f"Gist {gist_id} rejected, {self.marker_file} not in {files}")
            raise UpstreamError("Invalid gist")
        return files
