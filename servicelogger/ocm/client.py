"""OCM service log client."""

from __future__ import annotations

import httpx

from servicelogger.errors import OCMError
from servicelogger.logging_config import get_logger
from servicelogger.ocm.connection import DEFAULT_TIMEOUT_S, OCMConnection, establish_connection
from servicelogger.templates import Template

logger = get_logger(__name__)

CLUSTER_LOGS_PATH = "/api/service_logs/v1/cluster_logs"


class OCMClient:
    """Thin wrapper over the service log endpoints of one connection."""

    def __init__(self, connection: OCMConnection):
        self.connection = connection

    async def post_service_log(self, cluster_id: str, template: Template) -> None:
        """Post `template` as a service log for `cluster_id`.

        Raises:
            OCMError: transport failure or a 4xx/5xx response.
        """
        try:
            response = await self.connection.client.post(CLUSTER_LOGS_PATH, json=template.to_payload(cluster_id))
        except httpx.TimeoutException as e:
            raise OCMError("request timed out") from e
        except httpx.HTTPError as e:
            raise OCMError(f"request failed: {e}") from e

        if response.status_code >= 400:
            detail = _extract_detail(response)
            raise OCMError(
                f"HTTP {response.status_code}: {detail}",
                status_code=response.status_code,
                detail=detail,
            )
        logger.debug("Service log posted: cluster=%s status=%s", cluster_id, response.status_code)


def _extract_detail(resp: httpx.Response) -> str:
    """Extract error detail from an OCM error body."""
    try:
        data = resp.json()
        if isinstance(data, dict):
            return str(data.get("reason") or data.get("detail") or resp.text)
    except ValueError:
        pass
    return resp.text[:200] or resp.reason_phrase


async def send_service_log(
    url: str,
    token: str,
    cluster_id: str,
    template: Template,
    *,
    timeout: float = DEFAULT_TIMEOUT_S,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Deliver one service log over a dedicated connection.

    The connection lives for exactly this call and is closed afterward.
    """
    async with establish_connection(url, token, timeout=timeout, transport=transport) as connection:
        await OCMClient(connection).post_service_log(cluster_id, template)
