import logging

import httpx
import pytest

from shared.clients.docs.quip.DocsClientQuip import DocsClientQuip
from shared.helper.HelperConfig import HelperConfig
from wire_fixtures import TEST_BASE_URL, TEST_TOKEN


@pytest.fixture
def helper_config(monkeypatch):
    """HelperConfig with a token and a test base URL in the environment."""
    monkeypatch.setenv("DOCS_QUIP_API_TOKEN", TEST_TOKEN)
    monkeypatch.setenv("DOCS_QUIP_BASE_URL", TEST_BASE_URL)
    monkeypatch.delenv("QUIP_API_TOKEN", raising=False)
    monkeypatch.delenv("DOCS_TIMEOUT", raising=False)
    monkeypatch.delenv("DOCS_ENGINE", raising=False)
    return HelperConfig(logger=logging.getLogger("tests"))


@pytest.fixture
def requests_seen():
    """Requests captured by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(helper_config, requests_seen):
    """Factory for a booted DocsClientQuip whose wire is served by `handler`.

    `handler(request) -> httpx.Response`; every request is also appended to requests_seen.
    """

    async def _make(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = DocsClientQuip(helper_config=helper_config)
        await client.boot(transport=httpx.MockTransport(_record))
        return client

    return _make
