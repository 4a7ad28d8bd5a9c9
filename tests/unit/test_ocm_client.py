"""Unit tests for the OCM connection and service log client."""

import json

import httpx
import pytest

from servicelogger.errors import ConnectionSetupError, OCMError
from servicelogger.ocm import OCMClient, establish_connection, send_service_log
from servicelogger.ocm.client import CLUSTER_LOGS_PATH
from servicelogger.templates import Template

URL = "https://api.example.com"


@pytest.fixture
def template():
    return Template(
        severity="Info",
        service_name="SREManualAction",
        summary="Maintenance",
        description="Planned maintenance window.",
    )


def _transport(handler, requests):
    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return httpx.MockTransport(record)


@pytest.mark.parametrize("url", ["", "api.example.com", "ftp://api.example.com", "https://"])
def test_establish_connection_rejects_bad_url(url):
    with pytest.raises(ConnectionSetupError):
        establish_connection(url, "token")


def test_establish_connection_rejects_empty_token():
    with pytest.raises(ConnectionSetupError):
        establish_connection(URL, "  ")


@pytest.mark.asyncio
async def test_connection_close_idempotent():
    connection = establish_connection(URL, "token")
    assert connection.is_connected is True

    await connection.close()
    assert connection.is_connected is False

    # Should not raise
    await connection.close()
    with pytest.raises(ConnectionSetupError):
        _ = connection.client


@pytest.mark.asyncio
async def test_post_service_log_sends_payload(template):
    requests: list[httpx.Request] = []
    transport = _transport(lambda request: httpx.Response(201, json={"id": "log-1"}), requests)

    async with establish_connection(URL + "/", "secret", transport=transport) as connection:
        await OCMClient(connection).post_service_log("cluster-1", template)

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert request.url == httpx.URL(URL + CLUSTER_LOGS_PATH)
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["cluster_id"] == "cluster-1"
    assert body["summary"] == "Maintenance"


@pytest.mark.asyncio
async def test_post_service_log_maps_error_reason(template):
    transport = httpx.MockTransport(
        lambda request: httpx.Response(404, json={"kind": "Error", "reason": "Cluster 'nope' not found"})
    )

    async with establish_connection(URL, "secret", transport=transport) as connection:
        with pytest.raises(OCMError) as exc_info:
            await OCMClient(connection).post_service_log("nope", template)

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Cluster 'nope' not found"
    assert str(exc_info.value) == "HTTP 404: Cluster 'nope' not found"


@pytest.mark.asyncio
async def test_post_service_log_non_json_error(template):
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))

    async with establish_connection(URL, "secret", transport=transport) as connection:
        with pytest.raises(OCMError, match="HTTP 502: bad gateway"):
            await OCMClient(connection).post_service_log("c1", template)


@pytest.mark.asyncio
async def test_post_service_log_transport_error(template):
    def fail(request):
        raise httpx.ConnectError("connection refused")

    async with establish_connection(URL, "secret", transport=httpx.MockTransport(fail)) as connection:
        with pytest.raises(OCMError, match="connection refused"):
            await OCMClient(connection).post_service_log("c1", template)


@pytest.mark.asyncio
async def test_post_service_log_timeout(template):
    def slow(request):
        raise httpx.ReadTimeout("timed out")

    async with establish_connection(URL, "secret", transport=httpx.MockTransport(slow)) as connection:
        with pytest.raises(OCMError, match="request timed out"):
            await OCMClient(connection).post_service_log("c1", template)


@pytest.mark.asyncio
async def test_send_service_log_uses_fresh_connection(template):
    requests: list[httpx.Request] = []
    transport = _transport(lambda request: httpx.Response(201, json={}), requests)

    await send_service_log(URL, "secret", "c1", template, transport=transport)
    await send_service_log(URL, "secret", "c2", template, transport=transport)

    assert [json.loads(r.content)["cluster_id"] for r in requests] == ["c1", "c2"]


@pytest.mark.asyncio
async def test_send_service_log_setup_failure(template):
    with pytest.raises(ConnectionSetupError):
        await send_service_log("not-a-url", "secret", "c1", template)
