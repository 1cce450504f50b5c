from abc import abstractmethod
from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.Comment import Comment
from shared.clients.docs.models.User import User
from shared.clients.docs.models.SearchResult import SearchResult
from shared.models.errors import InputValidationError


class DocsClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def check_content_format(self, content_format: str) -> str:
        """
        Validates a content format name against the formats the backend accepts.

        Args:
            content_format (str): The requested format (e.g. "html").

        Returns:
            str: The normalized format name.

        Raises:
            InputValidationError: If the format is not supported.
        """
        normalized = (content_format or "").strip().lower()
        supported = self._get_supported_content_formats()
        if normalized not in supported:
            raise InputValidationError(f"Unsupported content format '{content_format}'. Use one of: {', '.join(supported)}.")
        return normalized

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "docs"
        """
        return "docs"

    @abstractmethod
    def _get_supported_content_formats(self) -> list[str]:
        """
        Returns the content formats accepted by create and edit requests (e.g. ["html", "markdown"]).
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_document(self, document_id: str) -> str:
        """
        Returns the endpoint path for fetching a single document (e.g. "/threads/{id}").
        """
        pass

    @abstractmethod
    def _get_endpoint_create_document(self) -> str:
        """
        Returns the endpoint path for document creation requests.
        """
        pass

    @abstractmethod
    def _get_endpoint_edit_document(self) -> str:
        """
        Returns the endpoint path for document edit requests.
        """
        pass

    @abstractmethod
    def _get_endpoint_delete_document(self) -> str:
        """
        Returns the endpoint path for document delete requests.
        """
        pass

    @abstractmethod
    def _get_endpoint_recent_documents(self, count: int) -> str:
        """
        Returns the endpoint path (with query string) for recent documents of the current user.

        Args:
            count (int): Maximum number of documents. Values <= 0 leave the count to the server.
        """
        pass

    @abstractmethod
    def _get_endpoint_search(self, query: str, count: int) -> str:
        """
        Returns the endpoint path (with url-encoded query string) for document search.

        Args:
            query (str): The raw search query.
            count (int): Maximum number of results. Values <= 0 leave the count to the server.
        """
        pass

    @abstractmethod
    def _get_endpoint_comments(self, document_id: str) -> str:
        """
        Returns the endpoint path for the comments of a document.
        """
        pass

    @abstractmethod
    def _get_endpoint_current_user(self) -> str:
        """
        Returns the endpoint path for the authenticated user.
        """
        pass

    @abstractmethod
    def _get_endpoint_user(self, user_id: str) -> str:
        """
        Returns the endpoint path for a user by ID.
        """
        pass

    ################ PAYLOAD BUILDER ##################
    @abstractmethod
    def _build_create_document_form(self, title: str, content: str, content_format: str) -> dict[str, str]:
        """
        Build the backend-specific form body of a create request.
        """
        pass

    @abstractmethod
    def _build_edit_document_form(self, document_id: str, content: str, operation: str, content_format: str) -> dict[str, str]:
        """
        Build the backend-specific form body of an edit request.

        Args:
            document_id (str): The document to edit.
            content (str): The content to insert.
            operation (str): Logical edit operation ("REPLACE", "APPEND", "PREPEND").
            content_format (str): Validated content format.
        """
        pass

    @abstractmethod
    def _build_delete_document_form(self, document_id: str) -> dict[str, str]:
        """
        Build the backend-specific form body of a delete request.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    ############# LISTING REQUESTS ##############
    async def do_fetch_recent_documents(self, limit: int = 10) -> list[Document]:
        """
        Fetches the recently used documents of the current user (single page).

        Args:
            limit (int): Maximum number of documents to request.

        Returns:
            list[Document]: The documents in the order returned by the backend.

        Raises:
            DocsClientError: If the request fails or the response cannot be normalized.
        """
        raw = await self.send(method="GET", endpoint=self._get_endpoint_recent_documents(limit))
        documents = self._parse_endpoint_recent_documents(raw)
        self.logging.info("Fetched %d recent documents from %s", len(documents), self._get_engine_name())
        return documents

    async def do_search_documents(self, query: str, limit: int = 10) -> SearchResult:
        """
        Searches documents (single page).

        Args:
            query (str): The search query.
            limit (int): Maximum number of results to request.

        Returns:
            SearchResult: Matching documents in relevance order.

        Raises:
            DocsClientError: If the request fails or the response cannot be normalized.
        """
        raw = await self.send(method="GET", endpoint=self._get_endpoint_search(query, limit))
        result = self._parse_endpoint_search(raw)
        self.logging.info("Search %r on %s returned %d documents", query[:80], self._get_engine_name(), len(result.documents))
        return result

    async def do_fetch_comments(self, document_id: str) -> list[Comment]:
        """
        Fetches the comments of a document.

        Raises:
            DocsClientError: If the request fails or the response cannot be normalized.
        """
        raw = await self.send(method="GET", endpoint=self._get_endpoint_comments(document_id))
        return self._parse_endpoint_comments(raw)

    ############# GET REQUESTS ##############
    async def do_fetch_document(self, document_id: str) -> Document:
        """
        Fetches a document including its content from the docs backend.

        Args:
            document_id (str): The ID of the document to fetch.

        Returns:
            Document: The normalized document.

        Raises:
            DocsClientError: If the request fails or the response cannot be normalized.
        """
        raw = await self.send(method="GET", endpoint=self._get_endpoint_document(document_id))
        return self._parse_endpoint_document(raw)

    async def do_fetch_current_user(self) -> User:
        """
        Fetches the authenticated user.
        """
        raw = await self.send(method="GET", endpoint=self._get_endpoint_current_user())
        return self._parse_endpoint_user(raw)

    async def do_fetch_user(self, user_id: str) -> User:
        """
        Fetches a user by ID.
        """
        raw = await self.send(method="GET", endpoint=self._get_endpoint_user(user_id))
        return self._parse_endpoint_user(raw)

    ############# MUTATING REQUESTS ##############
    async def do_create_document(self, title: str, content: str = "", content_format: str = "html") -> Document:
        """
        Creates a new document.

        Args:
            title (str): The document title.
            content (str): Initial content.
            content_format (str): Format of the content ("html" or "markdown").

        Returns:
            Document: The created document.

        Raises:
            InputValidationError: If the content format is unsupported (no request is made).
            DocsClientError: If the request fails or the response cannot be normalized.
        """
        content_format = self.check_content_format(content_format)
        raw = await self.send_form(
            method="POST",
            endpoint=self._get_endpoint_create_document(),
            fields=self._build_create_document_form(title, content, content_format),
        )
        document = self._parse_endpoint_created_document(raw)
        self.logging.info("Created document %s (%r) on %s", document.id, document.title, self._get_engine_name())
        return document

    async def do_edit_document(self, document_id: str, content: str, operation: str = "REPLACE", content_format: str = "html") -> Document:
        """
        Inserts content into an existing document.

        Args:
            document_id (str): The document to edit.
            content (str): The content to insert.
            operation (str): Logical edit operation. See the concrete client for how it maps onto the backend.
            content_format (str): Format of the content ("html" or "markdown").

        Returns:
            Document: The edited document.

        Raises:
            InputValidationError: If the content format is unsupported (no request is made).
            DocsClientError: If the request fails or the response cannot be normalized.
        """
        content_format = self.check_content_format(content_format)
        raw = await self.send_form(
            method="POST",
            endpoint=self._get_endpoint_edit_document(),
            fields=self._build_edit_document_form(document_id, content, operation, content_format),
        )
        document = self._parse_endpoint_edited_document(raw)
        self.logging.info("Edited document %s on %s (operation=%s)", document.id, self._get_engine_name(), operation)
        return document

    async def do_delete_document(self, document_id: str) -> None:
        """
        Deletes a document. The response body is not interpreted.

        Raises:
            DocsClientError: If the request fails.
        """
        await self.send_form(
            method="POST",
            endpoint=self._get_endpoint_delete_document(),
            fields=self._build_delete_document_form(document_id),
        )
        self.logging.warning("Deleted document %s on %s", document_id, self._get_engine_name())

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    ############### LIST RESPONSES ###############
    @abstractmethod
    def _parse_endpoint_recent_documents(self, raw: bytes) -> list[Document]:
        """
        Parses the raw body of the recent documents endpoint.

        Raises:
            DecodeError: If the body matches no known response shape.
        """
        pass

    @abstractmethod
    def _parse_endpoint_search(self, raw: bytes) -> SearchResult:
        """
        Parses the raw body of the search endpoint.

        Raises:
            DecodeError: If the body matches no known response shape.
        """
        pass

    @abstractmethod
    def _parse_endpoint_comments(self, raw: bytes) -> list[Comment]:
        """
        Parses the raw body of the comments endpoint.

        Raises:
            DecodeError: If the body matches no known response shape.
        """
        pass

    ############ GET RESPONSES ##############
    @abstractmethod
    def _parse_endpoint_document(self, raw: bytes) -> Document:
        """
        Parses the raw body of the document endpoint.

        Raises:
            DecodeError: If the body matches no known response shape.
        """
        pass

    @abstractmethod
    def _parse_endpoint_created_document(self, raw: bytes) -> Document:
        """
        Parses the raw body of the create endpoint.
        """
        pass

    @abstractmethod
    def _parse_endpoint_edited_document(self, raw: bytes) -> Document:
        """
        Parses the raw body of the edit endpoint.
        """
        pass

    @abstractmethod
    def _parse_endpoint_user(self, raw: bytes) -> User:
        """
        Parses the raw body of a user endpoint.
        """
        pass
