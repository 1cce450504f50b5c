"""MCP server exposing the docs tools and the current-user resource."""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Annotated, AsyncIterator

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from server.core import formatting
from server.core.DocsToolService import DEFAULT_LIMIT, DocsToolService
from shared.clients.docs.DocsClientInterface import DocsClientInterface
from shared.clients.docs.DocsClientManager import DocsClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import DocsClientError, InputValidationError

SERVER_NAME = "Quip MCP Server"
CURRENT_USER_URI = "quip://user/current"


@dataclass
class AppContext:
    service: DocsToolService


async def check_connection(helper_config: HelperConfig, docs_client: DocsClientInterface) -> None:
    """Check connectivity and credentials on startup.

    Failures are non-fatal: the server stays up and tool calls report the error.
    """
    logging = helper_config.get_logger()
    if not helper_config.get_bool_val("DOCS_HEALTHCHECK_ON_START", default=True):
        return
    try:
        await docs_client.do_healthcheck()
    except DocsClientError as e:
        logging.warning(
            "Docs client '%s' healthcheck failed: %s. Tool calls may fail.",
            docs_client.__class__.__name__,
            e,
        )
        return
    logging.info("Docs client '%s' is reachable.", docs_client.__class__.__name__)


def _tool_failure(action: str, error: DocsClientError) -> ToolError:
    if isinstance(error, InputValidationError):
        return ToolError(str(error))
    return ToolError(f"Failed to {action}: {error}")


def create_server(helper_config: HelperConfig, transport: httpx.AsyncBaseTransport | None = None) -> FastMCP:
    """Build the MCP server. The docs client is booted in the lifespan and closed on shutdown.

    Args:
        helper_config (HelperConfig): Configuration and logger.
        transport (httpx.AsyncBaseTransport | None): Optional HTTP transport for the docs client (tests).
    """
    logging = helper_config.get_logger()

    @asynccontextmanager
    async def lifespan(_: FastMCP) -> AsyncIterator[AppContext]:
        docs_client = DocsClientManager(helper_config=helper_config).get_client()
        await docs_client.boot(transport=transport)
        logging.info("Docs client booted.")
        try:
            await check_connection(helper_config, docs_client)
            yield AppContext(service=DocsToolService(helper_config=helper_config, docs_client=docs_client))
        finally:
            logging.info("Shutting down, closing docs client...")
            await docs_client.close()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    def service() -> DocsToolService:
        return mcp.get_context().request_context.lifespan_context.service

    ##########################################
    ################# TOOLS ##################
    ##########################################

    @mcp.tool(name="search_documents", description="Search for Quip documents")
    async def search_documents(
        query: Annotated[str, Field(description="Search query for documents")],
        limit: Annotated[int, Field(description="Maximum number of results (default: 10)")] = DEFAULT_LIMIT,
    ) -> str:
        try:
            result = await service().search_documents(query, limit)
        except DocsClientError as e:
            raise _tool_failure("search documents", e) from e
        return formatting.render_search_result(result)

    @mcp.tool(name="get_document", description="Get a specific Quip document by ID")
    async def get_document(
        document_id: Annotated[str, Field(description="The ID of the document to retrieve")],
    ) -> str:
        try:
            document = await service().get_document(document_id)
        except DocsClientError as e:
            raise _tool_failure("get document", e) from e
        return formatting.render_document(document)

    @mcp.tool(name="create_document", description="Create a new Quip document")
    async def create_document(
        title: Annotated[str, Field(description="The title of the new document")],
        content: Annotated[str, Field(description="The initial content of the document")] = "",
        format: Annotated[str, Field(description="Content format: html (default), markdown")] = "html",
    ) -> str:
        try:
            document = await service().create_document(title, content, format)
        except DocsClientError as e:
            raise _tool_failure("create document", e) from e
        return formatting.render_created_document(document)

    @mcp.tool(
        name="edit_document",
        description=(
            "Edit an existing Quip document. Note: Quip has no replace-in-place, "
            "REPLACE appends the content like APPEND."
        ),
    )
    async def edit_document(
        document_id: Annotated[str, Field(description="The ID of the document to edit")],
        content: Annotated[str, Field(description="The new content for the document")],
        operation: Annotated[str, Field(description="Edit operation: REPLACE (default, appends), APPEND, PREPEND")] = "REPLACE",
        format: Annotated[str, Field(description="Content format: html (default), markdown")] = "html",
    ) -> str:
        try:
            document = await service().edit_document(document_id, content, operation, format)
        except DocsClientError as e:
            raise _tool_failure("edit document", e) from e
        return formatting.render_edited_document(document)

    @mcp.tool(name="delete_document", description="Delete a Quip document (requires confirmation)")
    async def delete_document(
        document_id: Annotated[str, Field(description="The ID of the document to delete")],
        confirm: Annotated[str, Field(description="Type 'DELETE' to confirm deletion")],
    ) -> str:
        try:
            document = await service().delete_document(document_id, confirm)
        except DocsClientError as e:
            raise _tool_failure("delete document", e) from e
        return formatting.render_deleted_document(document)

    @mcp.tool(name="get_recent_threads", description="Get recent Quip threads for the current user")
    async def get_recent_threads(
        limit: Annotated[int, Field(description="Maximum number of recent threads to retrieve (default: 10)")] = DEFAULT_LIMIT,
    ) -> str:
        try:
            documents = await service().get_recent_documents(limit)
        except DocsClientError as e:
            raise _tool_failure("get recent threads", e) from e
        return formatting.render_recent_documents(documents)

    @mcp.tool(name="get_document_comments", description="Get comments for a Quip document")
    async def get_document_comments(
        document_id: Annotated[str, Field(description="The ID of the document to get comments for")],
    ) -> str:
        try:
            comments = await service().get_document_comments(document_id)
        except DocsClientError as e:
            raise _tool_failure("get comments", e) from e
        return formatting.render_comments(comments)

    @mcp.tool(name="get_user", description="Get Quip user information")
    async def get_user(
        user_id: Annotated[str, Field(description="The ID of the user to retrieve (use 'current' for current user)")],
    ) -> str:
        try:
            user = await service().get_user(user_id)
        except DocsClientError as e:
            raise _tool_failure("get user", e) from e
        return formatting.render_user(user)

    ##########################################
    ############### RESOURCES ################
    ##########################################

    @mcp.resource(
        CURRENT_USER_URI,
        name="Current User",
        description="Current Quip user information",
        mime_type="application/json",
    )
    async def current_user() -> str:
        user = await service().get_current_user()
        return formatting.render_user_resource(user)

    logging.info("All MCP tools and resources registered successfully.")
    return mcp
