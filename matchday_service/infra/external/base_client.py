"""Base HTTP client for the read endpoints of sibling services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)


class BaseHTTPClient:
    """Thin httpx wrapper with connection pooling and request logging.

    Example:
        ```python
        client = BaseHTTPClient("http://fixtures:3000", timeout=5.0)
        data = await client.get("/fixtures/0192f0c1-...")
        await client.close()
        ```

    ``transport`` lets tests swap in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers or {},
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.TransportError: On connection failures and timeouts.
            ValueError: If the body is not JSON.
        """
        logger.debug(f"GET request to {self.base_url}{path}", extra={"path": path})
        response = await self.client.get(path, params=params)
        logger.debug(
            f"GET response from {self.base_url}{path}",
            extra={"path": path, "status_code": response.status_code},
        )
        response.raise_for_status()
        return response.json()
