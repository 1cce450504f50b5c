"""Text rendering of canonical records for the assistant."""

import json
import logging

from markdownify import markdownify

from shared.clients.docs.models.Comment import Comment
from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.SearchResult import SearchResult
from shared.clients.docs.models.User import User

UNKNOWN_TIMESTAMP = "Unknown"

logger = logging.getLogger(__name__)


##########################################
############### HELPERS ##################
##########################################

def format_timestamp(timestamp_usec: int) -> str:
    """Render a microsecond timestamp as whole seconds since epoch.

    0 means unknown and renders as "Unknown", which no real timestamp produces.
    """
    if not timestamp_usec:
        return UNKNOWN_TIMESTAMP
    return str(timestamp_usec // 1_000_000)


def format_timestamp_seconds(timestamp_sec: int) -> str:
    """Render a timestamp that is already in seconds (user records)."""
    if not timestamp_sec:
        return UNKNOWN_TIMESTAMP
    return str(timestamp_sec)


def html_to_markdown(html_content: str) -> str:
    """Best-effort HTML to markdown conversion.

    Falls back to escaped HTML if the converter fails. Leftover entities are decoded
    and runs of blank lines collapse to one.
    """
    try:
        markdown = markdownify(html_content, heading_style="ATX")
    except Exception as e:
        logger.warning("HTML to markdown conversion failed, returning escaped HTML: %s", e)
        return html_content.replace("<", "&lt;").replace(">", "&gt;")

    markdown = (
        markdown.replace("&amp;", "&")
        .replace("&lt;", "<")
        .replace("&gt;", ">")
        .replace("&nbsp;", " ")
    )

    clean_lines: list[str] = []
    for line in markdown.split("\n"):
        trimmed = line.strip()
        if trimmed or (clean_lines and clean_lines[-1] != ""):
            clean_lines.append(trimmed)
    return "\n".join(clean_lines).strip()


##########################################
############### RENDERERS ################
##########################################

def render_search_result(result: SearchResult) -> str:
    response = f"Found {len(result.documents)} documents:\n\n"
    for i, doc in enumerate(result.documents, start=1):
        response += f"{i}. **{doc.title}**\n"
        response += f"   - ID: {doc.id}\n"
        response += f"   - Link: {doc.link}\n"
        response += f"   - Author: {doc.author_id}\n"
        response += f"   - Updated: {format_timestamp(doc.updated_at)}\n\n"
    return response


def render_document(doc: Document) -> str:
    response = f"**{doc.title}**\n\n"
    response += f"- **ID:** {doc.id}\n"
    response += f"- **Type:** {doc.type}\n"
    response += f"- **Link:** {doc.link}\n"
    response += f"- **Author:** {doc.author_id}\n"
    response += f"- **Created:** {format_timestamp(doc.created_at)}\n"
    response += f"- **Updated:** {format_timestamp(doc.updated_at)}\n"
    response += f"- **Access Level:** {doc.access_level}\n"
    if doc.html:
        response += f"\n**Content:**\n{html_to_markdown(doc.html)}\n"
    return response


def render_created_document(doc: Document) -> str:
    response = "✅ **Document created successfully!**\n\n"
    response += f"- **Title:** {doc.title}\n"
    response += f"- **ID:** {doc.id}\n"
    response += f"- **Link:** {doc.link}\n"
    response += f"- **Created:** {format_timestamp(doc.created_at)}\n"
    return response


def render_edited_document(doc: Document) -> str:
    response = "✅ **Document edited successfully!**\n\n"
    response += f"- **Title:** {doc.title}\n"
    response += f"- **ID:** {doc.id}\n"
    response += f"- **Link:** {doc.link}\n"
    response += f"- **Updated:** {format_timestamp(doc.updated_at)}\n"
    return response


def render_deleted_document(doc: Document) -> str:
    response = "🗑️ **Document deleted successfully!**\n\n"
    response += f"- **Deleted Document:** {doc.title}\n"
    response += f"- **ID:** {doc.id}\n"
    response += "- **Status:** ✅ Permanently deleted\n"
    return response


def render_recent_documents(documents: list[Document]) -> str:
    if not documents:
        return "No recent threads found."
    response = f"Found {len(documents)} recent threads:\n\n"
    for i, doc in enumerate(documents, start=1):
        response += f"{i}. **{doc.title}**\n"
        response += f"   - ID: {doc.id}\n"
        response += f"   - Type: {doc.type}\n"
        response += f"   - Link: {doc.link}\n"
        response += f"   - Updated: {format_timestamp(doc.updated_at)}\n\n"
    return response


def render_comments(comments: list[Comment]) -> str:
    if not comments:
        return "No comments found for this document."
    response = f"Found {len(comments)} comments:\n\n"
    for i, comment in enumerate(comments, start=1):
        response += f"{i}. **Author:** {comment.author_id}\n"
        response += f"   **Created:** {format_timestamp(comment.created_at)}\n"
        response += f"   **Text:** {comment.text}\n\n"
    return response


def render_user(user: User) -> str:
    response = f"**{user.name}**\n\n"
    response += f"- **ID:** {user.id}\n"
    response += f"- **Email:** {user.email}\n"
    response += f"- **Profile URL:** {user.url}\n"
    response += f"- **Created:** {format_timestamp_seconds(user.created_at)}\n"
    response += f"- **Updated:** {format_timestamp_seconds(user.updated_at)}\n"
    if user.profile_picture_url:
        response += f"- **Profile Picture:** {user.profile_picture_url}\n"
    return response


def render_user_resource(user: User) -> str:
    """JSON body of the current-user resource; timestamps stay in seconds as sent."""
    return json.dumps(
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "url": user.url,
            "created": user.created_at,
            "updated": user.updated_at,
        },
        indent=2,
    )
