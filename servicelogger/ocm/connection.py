"""Authenticated HTTP connection to an OCM API endpoint.

The token is used as a bearer access token as-is. Each connection owns one
`httpx.AsyncClient` and must be closed after use; `OCMConnection` is an async
context manager for that purpose.
"""

from __future__ import annotations

from types import TracebackType
from urllib.parse import urlparse

import httpx

from servicelogger import __version__
from servicelogger.errors import ConnectionSetupError
from servicelogger.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = f"servicelogger/{__version__}"


class OCMConnection:
    """Bearer-authenticated client bound to one OCM base URL."""

    def __init__(self, url: str, client: httpx.AsyncClient):
        self.url = url
        self._client: httpx.AsyncClient | None = client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ConnectionSetupError(f"Connection to {self.url} is closed")
        return self._client

    async def close(self) -> None:
        """Close connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "OCMConnection":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


def establish_connection(
    url: str,
    token: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_S,
    transport: httpx.AsyncBaseTransport | None = None,
) -> OCMConnection:
    """Create a connection to `url` authenticated with `token`.

    Args:
        url: OCM base URL, e.g. https://api.openshift.com
        token: OCM access token
        timeout: Request timeout in seconds
        transport: Optional transport override (tests use httpx.MockTransport)

    Raises:
        ConnectionSetupError: URL or token is unusable.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConnectionSetupError(f"invalid OCM URL: {url!r}")
    if not token or not token.strip():
        raise ConnectionSetupError("OCM token is empty")

    base_url = url.rstrip("/")
    client = httpx.AsyncClient(
        base_url=base_url,
        transport=transport,
        timeout=timeout,
        headers={
            "Authorization": f"Bearer {token.strip()}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        },
    )
    logger.debug("OCM connection created: url=%s", base_url)
    return OCMConnection(base_url, client)
