"""Identity service HTTP client.

Resolves user ids to user summaries through the identity service's
batch lookup. Implements the `UserDirectory` port.
"""

from collections.abc import Sequence
from typing import Any

import httpx
import structlog

from product_service.domain.entities import UserSummary
from product_service.domain.exceptions import RemoteDependencyError
from product_service.infrastructure.config import settings

logger = structlog.get_logger()

SERVICE_NAME = "identity-service"
BATCH_LOOKUP_PATTERN = "users.find.summary.batch"


class IdentityServiceClient:
    """HTTP client for the identity service.

    One pooled `httpx.AsyncClient` is created lazily and shared by every
    request until `close()` is called.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
    ) -> None:
        """Initialize identity service client.

        Args:
            base_url: Identity service base URL.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def find_summaries(self, user_ids: Sequence[str]) -> list[UserSummary]:
        """Resolve a batch of user ids in one request.

        Args:
            user_ids: Distinct user ids to resolve.

        Returns:
            Summaries for the ids the identity service knows.

        Raises:
            RemoteDependencyError: On timeout, transport error, error
                status or malformed response.
        """
        client = await self._get_client()
        path = f"/rpc/{BATCH_LOOKUP_PATTERN}"

        try:
            logger.debug(
                "Resolving user summaries",
                path=path,
                user_count=len(user_ids),
            )
            response = await client.post(path, json={"ids": list(user_ids)})
        except httpx.TimeoutException as e:
            raise RemoteDependencyError(
                SERVICE_NAME,
                f"Request timed out after {self.timeout}s: {e}",
            ) from e
        except httpx.HTTPError as e:
            raise RemoteDependencyError(SERVICE_NAME, f"Request failed: {e}") from e

        if response.status_code >= 400:
            raise RemoteDependencyError(
                SERVICE_NAME,
                f"Batch lookup failed: {response.text}",
                response.status_code,
            )

        try:
            data: Any = response.json()
            return [UserSummary.from_api_response(item) for item in data]
        except (ValueError, TypeError, KeyError) as e:
            raise RemoteDependencyError(
                SERVICE_NAME,
                f"Malformed batch lookup response: {e}",
                response.status_code,
            ) from e


# Global client instance
_identity_client: IdentityServiceClient | None = None


def get_identity_client() -> IdentityServiceClient:
    """Get the identity service client singleton.

    Returns:
        IdentityServiceClient instance.
    """
    global _identity_client
    if _identity_client is None:
        _identity_client = IdentityServiceClient(
            base_url=settings.identity_service_url,
            timeout=settings.identity_service_timeout,
        )
    return _identity_client


async def close_identity_client() -> None:
    """Close and drop the identity service client singleton."""
    global _identity_client
    if _identity_client is not None:
        await _identity_client.close()
        _identity_client = None
