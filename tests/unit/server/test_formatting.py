import json

from server.core import formatting
from shared.clients.docs.models.Comment import Comment
from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.SearchResult import SearchResult
from shared.clients.docs.models.User import User


def make_document(**overrides) -> Document:
    values = {
        "id": "doc1",
        "title": "Test Document",
        "type": "document",
        "link": "https://quip.com/doc1",
        "author_id": "user123",
        "created_at": 1640995200000000,
        "updated_at": 1640995300000000,
        "access_level": "OWN",
    }
    values.update(overrides)
    return Document(**values)


def test_format_timestamp_divides_microseconds():
    assert formatting.format_timestamp(1640995200000000) == "1640995200"
    assert formatting.format_timestamp(1640995200999999) == "1640995200"


def test_format_timestamp_zero_is_unknown():
    assert formatting.format_timestamp(0) == "Unknown"
    assert formatting.format_timestamp_seconds(0) == "Unknown"


def test_format_timestamp_seconds_is_not_divided():
    assert formatting.format_timestamp_seconds(1640995200) == "1640995200"


def test_html_to_markdown_converts_and_collapses_blank_lines():
    markdown = formatting.html_to_markdown("<h1>Hello</h1><p>First &amp; second</p><p></p><p></p><p>Last</p>")

    assert "# Hello" in markdown
    assert "First & second" in markdown
    assert "Last" in markdown
    assert "\n\n\n" not in markdown
    assert markdown == markdown.strip()


def test_render_document_includes_metadata_and_content():
    text = formatting.render_document(make_document(html="<p>Body text</p>"))

    assert "**Test Document**" in text
    assert "- **ID:** doc1" in text
    assert "- **Created:** 1640995200" in text
    assert "- **Updated:** 1640995300" in text
    assert "**Content:**" in text
    assert "Body text" in text


def test_render_document_without_html_has_no_content_section():
    assert "**Content:**" not in formatting.render_document(make_document())


def test_render_document_with_unknown_timestamps():
    text = formatting.render_document(make_document(created_at=0, updated_at=0))

    assert "- **Created:** Unknown" in text
    assert "- **Updated:** Unknown" in text


def test_render_search_result_numbers_documents_in_order():
    result = SearchResult(documents=[make_document(id="a", title="Alpha"), make_document(id="b", title="Beta")])

    text = formatting.render_search_result(result)

    assert text.startswith("Found 2 documents:")
    assert text.index("1. **Alpha**") < text.index("2. **Beta**")


def test_render_recent_documents_empty():
    assert formatting.render_recent_documents([]) == "No recent threads found."


def test_render_recent_documents():
    text = formatting.render_recent_documents([make_document()])

    assert text.startswith("Found 1 recent threads:")
    assert "   - Updated: 1640995300" in text


def test_render_comments_prints_long_text_in_full():
    comments = [
        Comment(id="c1", text="x" * 1500, author_id="user123", created_at=1640995200000000),
    ]

    text = formatting.render_comments(comments)

    assert "**Author:** user123" in text
    assert "**Created:** 1640995200" in text
    assert ("x" * 1500) in text
    assert "..." not in text


def test_render_comments_empty():
    assert formatting.render_comments([]) == "No comments found for this document."


def test_render_mutation_results():
    doc = make_document()

    assert "Document created successfully" in formatting.render_created_document(doc)
    assert "- **Updated:** 1640995300" in formatting.render_edited_document(doc)
    deleted = formatting.render_deleted_document(doc)
    assert "- **Deleted Document:** Test Document" in deleted
    assert "- **ID:** doc1" in deleted


def test_render_user_uses_seconds():
    user = User(id="user123", name="Test User", email="test@example.com", created_at=1640995200, updated_at=0)

    text = formatting.render_user(user)

    assert "**Test User**" in text
    assert "- **Created:** 1640995200" in text
    assert "- **Updated:** Unknown" in text
    assert "Profile Picture" not in text


def test_render_user_resource_is_json():
    user = User(id="user123", name="Test User", created_at=1640995200)

    data = json.loads(formatting.render_user_resource(user))

    assert data == {
        "id": "user123",
        "name": "Test User",
        "email": "",
        "url": "",
        "created": 1640995200,
        "updated": 0,
    }
