from urllib.parse import parse_qs

import pytest

from shared.clients.docs.DocsClientManager import DocsClientManager
from shared.clients.docs.quip.DocsClientQuip import (
    EDIT_LOCATION_APPEND,
    EDIT_LOCATION_PREPEND,
    DocsClientQuip,
    resolve_edit_location,
)
from shared.models.errors import APIError, DecodeError, InputValidationError
from wire_fixtures import TEST_BASE_URL, json_response, thread


def form_of(request) -> dict:
    return {key: values[0] for key, values in parse_qs(request.content.decode(), keep_blank_values=True).items()}


########### EDIT LOCATIONS ###########

@pytest.mark.parametrize(
    "operation, location",
    [
        ("APPEND", EDIT_LOCATION_APPEND),
        ("PREPEND", EDIT_LOCATION_PREPEND),
        ("REPLACE", EDIT_LOCATION_APPEND),
        ("  prepend ", EDIT_LOCATION_PREPEND),
        ("INSERT_AFTER", EDIT_LOCATION_APPEND),
        ("", EDIT_LOCATION_APPEND),
        (None, EDIT_LOCATION_APPEND),
    ],
)
def test_resolve_edit_location(operation, location):
    assert resolve_edit_location(operation) == location


########### READS ###########

@pytest.mark.asyncio
async def test_fetch_document(make_client, requests_seen):
    client = await make_client(lambda request: json_response({"thread": thread("doc1"), "html": "<p>hi</p>"}))

    document = await client.do_fetch_document("doc1")

    assert document.id == "doc1"
    assert document.html == "<p>hi</p>"
    assert requests_seen[0].method == "GET"
    assert str(requests_seen[0].url) == f"{TEST_BASE_URL}/threads/doc1"


@pytest.mark.asyncio
async def test_fetch_recent_documents_sends_count(make_client, requests_seen):
    client = await make_client(lambda request: json_response({"k": {"thread": thread("doc1")}}))

    documents = await client.do_fetch_recent_documents(5)

    assert [d.id for d in documents] == ["doc1"]
    assert requests_seen[0].url.path == "/1/threads/recent"
    assert requests_seen[0].url.params["count"] == "5"


@pytest.mark.asyncio
async def test_fetch_recent_documents_omits_non_positive_count(make_client, requests_seen):
    client = await make_client(lambda request: json_response([]))

    await client.do_fetch_recent_documents(0)

    assert "count" not in requests_seen[0].url.params


@pytest.mark.asyncio
async def test_search_encodes_query_and_count(make_client, requests_seen):
    client = await make_client(lambda request: json_response([{"thread": thread("doc1")}, {"thread": thread("doc2")}]))

    result = await client.do_search_documents("meeting notes & plans", 2)

    assert [d.id for d in result.documents] == ["doc1", "doc2"]
    assert result.users == []
    url = requests_seen[0].url
    assert url.path == "/1/threads/search"
    assert url.params["query"] == "meeting notes & plans"
    assert url.params["count"] == "2"
    assert b"query=meeting+notes+%26+plans" in url.raw_path


@pytest.mark.asyncio
async def test_search_omits_non_positive_count(make_client, requests_seen):
    client = await make_client(lambda request: json_response([]))

    await client.do_search_documents("x", -1)

    assert "count" not in requests_seen[0].url.params


@pytest.mark.asyncio
async def test_fetch_comments(make_client, requests_seen):
    client = await make_client(lambda request: json_response([{"id": "c1", "text": "Nice"}]))

    comments = await client.do_fetch_comments("doc1")

    assert [c.text for c in comments] == ["Nice"]
    assert requests_seen[0].url.path == "/1/threads/doc1/messages"


@pytest.mark.asyncio
async def test_fetch_current_user_and_user_by_id(make_client, requests_seen):
    client = await make_client(lambda request: json_response({"id": "user123", "name": "Test User", "created": 1640995200}))

    current = await client.do_fetch_current_user()
    other = await client.do_fetch_user("user123")

    assert current.name == other.name == "Test User"
    assert [r.url.path for r in requests_seen] == ["/1/users/current", "/1/users/user123"]


@pytest.mark.asyncio
async def test_document_id_is_path_escaped(make_client, requests_seen):
    client = await make_client(lambda request: json_response(thread("a/b")))

    await client.do_fetch_document("a/b")

    assert requests_seen[0].url.raw_path == b"/1/threads/a%2Fb"


########### WRITES ###########

@pytest.mark.asyncio
async def test_create_document_posts_form(make_client, requests_seen):
    client = await make_client(lambda request: json_response({"thread": thread("new1", title="Plan"), "html": "<h1>Plan</h1>"}))

    document = await client.do_create_document("Plan", "# Plan", "markdown")

    request = requests_seen[0]
    assert request.method == "POST"
    assert request.url.path == "/1/threads/new-document"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert form_of(request) == {"title": "Plan", "content": "# Plan", "format": "markdown"}
    assert document.id == "new1"
    assert document.html == "<h1>Plan</h1>"


@pytest.mark.asyncio
async def test_create_document_rejects_bare_response(make_client):
    client = await make_client(lambda request: json_response(thread("new1")))

    with pytest.raises(DecodeError):
        await client.do_create_document("Plan")


@pytest.mark.asyncio
@pytest.mark.parametrize("operation, location", [("REPLACE", "0"), ("APPEND", "0"), ("PREPEND", "1"), ("bogus", "0")])
async def test_edit_document_sends_location(make_client, requests_seen, operation, location):
    client = await make_client(lambda request: json_response({"thread": thread("doc1"), "html": "<p>new</p>"}))

    await client.do_edit_document("doc1", "<p>new</p>", operation)

    request = requests_seen[0]
    assert request.url.path == "/1/threads/edit-document"
    assert form_of(request) == {"thread_id": "doc1", "content": "<p>new</p>", "location": location, "format": "html"}


@pytest.mark.asyncio
async def test_delete_document_posts_form(make_client, requests_seen):
    client = await make_client(lambda request: json_response({}))

    assert await client.do_delete_document("doc1") is None

    request = requests_seen[0]
    assert request.url.path == "/1/threads/delete"
    assert form_of(request) == {"thread_id": "doc1", "wipeout": "false"}


@pytest.mark.asyncio
@pytest.mark.parametrize("call", ["create", "edit"])
async def test_unsupported_format_is_rejected_before_any_request(make_client, requests_seen, call):
    client = await make_client(lambda request: json_response({}))

    with pytest.raises(InputValidationError, match="Unsupported content format"):
        if call == "create":
            await client.do_create_document("Plan", "x", "docx")
        else:
            await client.do_edit_document("doc1", "x", "APPEND", "docx")

    assert requests_seen == []


def test_check_content_format_normalizes_case(helper_config):
    assert DocsClientQuip(helper_config=helper_config).check_content_format(" Markdown ") == "markdown"


@pytest.mark.asyncio
async def test_api_error_surfaces_from_operation(make_client):
    client = await make_client(lambda request: json_response({"error": "Not found"}, status_code=404))

    with pytest.raises(APIError) as exc_info:
        await client.do_fetch_document("missing")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_healthcheck_hits_current_user(make_client, requests_seen):
    client = await make_client(lambda request: json_response({"id": "user123"}))

    await client.do_healthcheck()

    assert requests_seen[0].url.path == "/1/users/current"


########### MANAGER ###########

def test_manager_instantiates_quip_by_default(helper_config):
    assert isinstance(DocsClientManager(helper_config=helper_config).get_client(), DocsClientQuip)


def test_manager_accepts_engine_in_any_case(helper_config, monkeypatch):
    monkeypatch.setenv("DOCS_ENGINE", "QUIP")
    assert isinstance(DocsClientManager(helper_config=helper_config).get_client(), DocsClientQuip)


def test_manager_rejects_unknown_engine(helper_config, monkeypatch):
    monkeypatch.setenv("DOCS_ENGINE", "confluence")

    with pytest.raises(ValueError, match="Unsupported docs engine"):
        DocsClientManager(helper_config=helper_config)


def test_manager_rejects_blank_engine(helper_config, monkeypatch):
    monkeypatch.setenv("DOCS_ENGINE", "   ")

    with pytest.raises(ValueError, match="DOCS_ENGINE is set but empty"):
        DocsClientManager(helper_config=helper_config)
