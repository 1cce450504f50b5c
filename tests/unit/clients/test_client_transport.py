"""Transport behaviour of the docs client: headers, bodies and error classification."""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from shared.clients.docs.quip.DocsClientQuip import DocsClientQuip
from shared.models.errors import APIError, TransportError
from wire_fixtures import TEST_BASE_URL, TEST_TOKEN, json_response


@pytest.mark.asyncio
async def test_send_sets_auth_user_agent_and_json_content_type(make_client, requests_seen):
    client = await make_client(lambda request: json_response({"ok": True}))

    body = await client.send("GET", "/users/current")

    assert json.loads(body) == {"ok": True}
    request = requests_seen[0]
    assert str(request.url) == f"{TEST_BASE_URL}/users/current"
    assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["User-Agent"] == "MCP-Quip-Server/1.0"


@pytest.mark.asyncio
async def test_send_serializes_json_body(make_client, requests_seen):
    client = await make_client(lambda request: json_response({}))

    await client.send("POST", "/anything", json_body={"title": "Hello", "count": 2})

    assert json.loads(requests_seen[0].content) == {"title": "Hello", "count": 2}


@pytest.mark.asyncio
async def test_send_form_encodes_fields(make_client, requests_seen):
    client = await make_client(lambda request: json_response({}))

    await client.send_form("POST", "/threads/delete", {"thread_id": "abc", "wipeout": "false"})

    request = requests_seen[0]
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"
    assert parse_qs(request.content.decode()) == {"thread_id": ["abc"], "wipeout": ["false"]}


@pytest.mark.asyncio
async def test_send_returns_raw_bytes_without_interpreting_them(make_client):
    client = await make_client(lambda request: httpx.Response(200, content=b"not json at all"))

    assert await client.send("GET", "/threads/x") == b"not json at all"


@pytest.mark.asyncio
async def test_non_2xx_raises_api_error_with_status_and_verbatim_body(make_client):
    client = await make_client(lambda request: httpx.Response(401, content=b'{"error":"Invalid token"}'))

    with pytest.raises(APIError) as exc_info:
        await client.send("GET", "/users/current")

    error = exc_info.value
    assert error.status_code == 401
    assert error.body == '{"error":"Invalid token"}'
    assert "401" in str(error)
    assert '{"error":"Invalid token"}' in str(error)


@pytest.mark.asyncio
async def test_redirect_status_is_not_success(make_client):
    client = await make_client(lambda request: httpx.Response(302, headers={"Location": "/elsewhere"}))

    with pytest.raises(APIError) as exc_info:
        await client.send("GET", "/threads/x")
    assert exc_info.value.status_code == 302


@pytest.mark.asyncio
async def test_timeout_raises_transport_error(make_client):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = await make_client(handler)

    with pytest.raises(TransportError):
        await client.send("GET", "/users/current")


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error(make_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = await make_client(handler)

    with pytest.raises(TransportError) as exc_info:
        await client.send("GET", "/users/current")
    assert not isinstance(exc_info.value, APIError)


@pytest.mark.asyncio
async def test_body_read_failure_raises_transport_error(make_client):
    def handler(request):
        raise httpx.ReadError("connection reset while reading body", request=request)

    client = await make_client(handler)

    with pytest.raises(TransportError):
        await client.send("GET", "/threads/x")


@pytest.mark.asyncio
async def test_failed_request_is_not_retried(make_client, requests_seen):
    client = await make_client(lambda request: httpx.Response(503, content=b"unavailable"))

    with pytest.raises(APIError):
        await client.send("GET", "/threads/x")
    assert len(requests_seen) == 1


@pytest.mark.asyncio
async def test_send_before_boot_raises_transport_error(helper_config):
    client = DocsClientQuip(helper_config=helper_config)

    with pytest.raises(TransportError):
        await client.send("GET", "/users/current")


@pytest.mark.asyncio
async def test_close_releases_http_client(make_client):
    client = await make_client(lambda request: json_response({}))

    await client.close()

    with pytest.raises(TransportError):
        await client.send("GET", "/users/current")


def test_timeout_defaults_to_thirty_seconds(helper_config):
    assert DocsClientQuip(helper_config=helper_config).timeout == 30.0


def test_timeout_is_read_from_config(helper_config, monkeypatch):
    monkeypatch.setenv("DOCS_TIMEOUT", "5")
    assert DocsClientQuip(helper_config=helper_config).timeout == 5


def test_missing_token_fails_configuration(helper_config, monkeypatch):
    monkeypatch.delenv("DOCS_QUIP_API_TOKEN")

    with pytest.raises(ValueError, match="DOCS_QUIP_API_TOKEN"):
        DocsClientQuip(helper_config=helper_config)


def test_clients_hold_independent_configuration(helper_config, monkeypatch):
    first = DocsClientQuip(helper_config=helper_config)
    monkeypatch.setenv("DOCS_QUIP_BASE_URL", "https://other.test/1")
    second = DocsClientQuip(helper_config=helper_config)

    assert first._get_base_url() == TEST_BASE_URL
    assert second._get_base_url() == "https://other.test/1"
