"""Docs tool service: orchestrates docs client calls behind the MCP tools.

Validates tool arguments before any network call and composes multi-step flows
(fetch-then-delete). Returns canonical records; formatting is done by the MCP layer.
"""

from shared.clients.docs.DocsClientInterface import DocsClientInterface
from shared.clients.docs.models.Comment import Comment
from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.SearchResult import SearchResult
from shared.clients.docs.models.User import User
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import InputValidationError

DELETE_CONFIRMATION = "DELETE"
CURRENT_USER_ALIAS = "current"
DEFAULT_LIMIT = 10


class DocsToolService:
    """Runs one docs operation per tool call against the configured docs client."""

    def __init__(self, helper_config: HelperConfig, docs_client: DocsClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._docs = docs_client

    ##########################################
    ################ CORE ####################
    ##########################################

    async def search_documents(self, query: str, limit: int = DEFAULT_LIMIT) -> SearchResult:
        self._require("query", query)
        return await self._docs.do_search_documents(query, limit)

    async def get_document(self, document_id: str) -> Document:
        self._require("document_id", document_id)
        return await self._docs.do_fetch_document(document_id)

    async def create_document(self, title: str, content: str = "", content_format: str = "html") -> Document:
        self._require("title", title)
        return await self._docs.do_create_document(title, content or "", content_format)

    async def edit_document(self, document_id: str, content: str, operation: str = "REPLACE", content_format: str = "html") -> Document:
        """Insert content into a document.

        "REPLACE" appends: the backend has no replace-in-place position.
        """
        self._require("document_id", document_id)
        self._require("content", content)
        return await self._docs.do_edit_document(document_id, content, operation, content_format)

    async def delete_document(self, document_id: str, confirm: str) -> Document:
        """Delete a document after an exact confirmation.

        The document is fetched first so the caller can report what was deleted.
        If that fetch fails, the delete request is never sent.

        Args:
            document_id (str): The document to delete.
            confirm (str): Must equal "DELETE" exactly (case-sensitive).

        Returns:
            Document: The document as it was before deletion.

        Raises:
            InputValidationError: If the confirmation does not match (no request is made).
            DocsClientError: If the fetch or the delete fails.
        """
        self._require("document_id", document_id)
        if confirm != DELETE_CONFIRMATION:
            self.logging.warning("Deletion of document %s cancelled: confirmation did not match.", document_id)
            raise InputValidationError(
                f"Deletion cancelled. To delete the document, you must set confirm='{DELETE_CONFIRMATION}'"
            )

        document = await self._docs.do_fetch_document(document_id)
        await self._docs.do_delete_document(document_id)
        return document

    async def get_recent_documents(self, limit: int = DEFAULT_LIMIT) -> list[Document]:
        return await self._docs.do_fetch_recent_documents(limit)

    async def get_document_comments(self, document_id: str) -> list[Comment]:
        self._require("document_id", document_id)
        return await self._docs.do_fetch_comments(document_id)

    async def get_user(self, user_id: str) -> User:
        """Fetch a user; the id "current" resolves to the authenticated user."""
        self._require("user_id", user_id)
        if user_id == CURRENT_USER_ALIAS:
            return await self._docs.do_fetch_current_user()
        return await self._docs.do_fetch_user(user_id)

    async def get_current_user(self) -> User:
        return await self._docs.do_fetch_current_user()

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _require(self, name: str, value: str | None) -> None:
        if value is None or not str(value).strip():
            raise InputValidationError(f"Invalid {name} argument: must be a non-empty string")
