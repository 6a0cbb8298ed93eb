"""Tests for the identity service client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from product_service.domain.entities import UserSummary
from product_service.domain.exceptions import RemoteDependencyError
from product_service.infrastructure import identity_client as identity_module
from product_service.infrastructure.identity_client import (
    IdentityServiceClient,
    close_identity_client,
    get_identity_client,
)


def make_response(status_code: int, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload
    return response


class TestIdentityServiceClient:
    """Tests for IdentityServiceClient."""

    @pytest.fixture
    def client(self) -> IdentityServiceClient:
        """Create a test client."""
        return IdentityServiceClient(base_url="http://identity:8010/", timeout=2.0)

    def test_client_initialization(self, client) -> None:
        assert client.base_url == "http://identity:8010"
        assert client.timeout == 2.0
        assert client._client is None

    @pytest.mark.asyncio
    async def test_find_summaries_success(self, client) -> None:
        """The batch lookup posts the ids and parses summaries."""
        response = make_response(
            200,
            [
                {"id": "u1", "name": "Ann"},
                {"id": "u2", "name": "Ben", "email": "ben@example.com"},
            ],
        )

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            users = await client.find_summaries(["u1", "u2", "u3"])

        mock_http_client.post.assert_awaited_once_with(
            "/rpc/users.find.summary.batch",
            json={"ids": ["u1", "u2", "u3"]},
        )
        assert users == [UserSummary(id="u1", name="Ann"), UserSummary(id="u2", name="Ben")]
        assert users[1].extra == {"email": "ben@example.com"}

    @pytest.mark.asyncio
    async def test_timeout_is_remote_failure(self, client) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(side_effect=httpx.ReadTimeout("too slow"))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(RemoteDependencyError, match="timed out") as exc_info:
                await client.find_summaries(["u1"])

        assert exc_info.value.service == "identity-service"
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_connection_error_is_remote_failure(self, client) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(RemoteDependencyError, match="Request failed"):
                await client.find_summaries(["u1"])

    @pytest.mark.asyncio
    async def test_error_status_is_remote_failure(self, client) -> None:
        response = make_response(503, text="unavailable")

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(RemoteDependencyError) as exc_info:
                await client.find_summaries(["u1"])

        assert exc_info.value.status_code == 503
        assert "unavailable" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_malformed_response_is_remote_failure(self, client) -> None:
        response = make_response(200, [{"name": "no id"}])

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(RemoteDependencyError, match="Malformed"):
                await client.find_summaries(["u1"])

    @pytest.mark.asyncio
    async def test_close_releases_http_client(self, client) -> None:
        http_client = await client._get_client()
        assert isinstance(http_client, httpx.AsyncClient)
        assert await client._get_client() is http_client

        await client.close()

        assert client._client is None
        assert http_client.is_closed


@pytest.mark.asyncio
async def test_singleton_lifecycle() -> None:
    """The shared client is created once and dropped on close."""
    await close_identity_client()

    first = get_identity_client()
    assert get_identity_client() is first

    await close_identity_client()
    assert identity_module._identity_client is None
