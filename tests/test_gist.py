"""Tests for the gist API client, the gist verifier and /validateGist."""

import httpx
import pytest

from gistlink.errors import UpstreamError, ValidationError
from gistlink.services.gist import GistClient, GistLookupError, GistVerifier
from tests.conftest import FakeGistClient


def github_transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


def gist_payload(*filenames: str) -> dict:
    return {"id": "abc", "files": {name: {"filename": name} for name in filenames}}


class TestGistClient:
    @pytest.mark.asyncio
    async def test_returns_filenames(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=gist_payload("README.md", "setup.sh"))

        client = GistClient(
            base_url="https://api.example.test", token="t0k", transport=github_transport(handler)
        )
        files = await client.fetch_gist_files("abc")

        assert files == ["README.md", "setup.sh"]
        assert requests[0].url == "https://api.example.test/gists/abc"
        assert requests[0].headers["Authorization"] == "Bearer t0k"

    @pytest.mark.asyncio
    async def test_null_id_returns_empty_list_without_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = GistClient(transport=github_transport(handler))
        assert await client.fetch_gist_files(None) == []

    @pytest.mark.asyncio
    async def test_unknown_gist_returns_empty_list(self):
        client = GistClient(
            transport=github_transport(lambda request: httpx.Response(404, json={}))
        )
        assert await client.fetch_gist_files("missing") == []

    @pytest.mark.asyncio
    async def test_server_error_raises_lookup_error(self):
        client = GistClient(
            transport=github_transport(lambda request: httpx.Response(502, text="bad gateway"))
        )
        with pytest.raises(GistLookupError):
            await client.fetch_gist_files("abc")

    @pytest.mark.asyncio
    async def test_timeout_raises_lookup_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = GistClient(transport=github_transport(handler))
        with pytest.raises(GistLookupError):
            await client.fetch_gist_files("abc")

    @pytest.mark.asyncio
    async def test_non_json_body_raises_lookup_error(self):
        client = GistClient(
            transport=github_transport(lambda request: httpx.Response(200, text="<html>"))
        )
        with pytest.raises(GistLookupError):
            await client.fetch_gist_files("abc")


class TestGistVerifier:
    @pytest.mark.asyncio
    async def test_accepts_gist_with_marker(self):
        verifier = GistVerifier(FakeGistClient({"g1": ["a.txt", "setup.sh"]}), "setup.sh")
        assert await verifier.verify("g1") == ["a.txt", "setup.sh"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("gist_id", [None, ""])
    async def test_requires_an_id(self, gist_id):
        client = FakeGistClient({})
        verifier = GistVerifier(client, "setup.sh")
        with pytest.raises(ValidationError, match="No gist ID provided"):
            await verifier.verify(gist_id)
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_unknown_gist(self):
        verifier = GistVerifier(FakeGistClient({}), "setup.sh")
        with pytest.raises(UpstreamError, match="No gist with that ID"):
            await verifier.verify("g1")

    @pytest.mark.asyncio
    async def test_gist_without_marker(self):
        verifier = GistVerifier(FakeGistClient({"g1": ["notes.md"]}), "setup.sh")
        with pytest.raises(UpstreamError, match="Invalid gist"):
            await verifier.verify("g1")

    @pytest.mark.asyncio
    async def test_lookup_failure(self):
        verifier = GistVerifier(FakeGistClient(), "setup.sh")
        with pytest.raises(UpstreamError, match="Gist lookup failed"):
            await verifier.verify("broken")


def test_validate_gist_endpoint(client):
    response = client.get("/validateGist/0a1b2c3d4e5f60718293a4b5c6d7e8f9")
    assert response.status_code == 200
    assert response.json() == {"gist_id": "0a1b2c3d4e5f60718293a4b5c6d7e8f9", "files": ["setup.sh"]}


def test_validate_gist_endpoint_rejects_unrelated_gist(client):
    response = client.get("/validateGist/c0ffee00c0ffee00c0ffee00c0ffee00")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid gist"}
