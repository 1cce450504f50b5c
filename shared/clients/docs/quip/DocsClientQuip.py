from urllib.parse import quote, quote_plus

from shared.clients.docs.DocsClientInterface import DocsClientInterface
from shared.clients.docs.quip.QuipResponseNormalizer import QuipResponseNormalizer
from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.Comment import Comment
from shared.clients.docs.models.User import User
from shared.clients.docs.models.SearchResult import SearchResult
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig

DEFAULT_BASE_URL = "https://platform.quip.com/1"

# Quip only knows insert positions: 0 = append at end, 1 = prepend at start.
# There is no replace-in-place, so "REPLACE" (and anything unknown) appends.
EDIT_LOCATION_APPEND = "0"
EDIT_LOCATION_PREPEND = "1"
_EDIT_LOCATIONS = {
    "APPEND": EDIT_LOCATION_APPEND,
    "PREPEND": EDIT_LOCATION_PREPEND,
    "REPLACE": EDIT_LOCATION_APPEND,
}


def resolve_edit_location(operation: str | None) -> str:
    """Map a logical edit operation onto Quip's location code.

    REPLACE does NOT replace: Quip has no such position, so it appends like APPEND.
    Unrecognized operations append as well.
    """
    return _EDIT_LOCATIONS.get((operation or "").strip().upper(), EDIT_LOCATION_APPEND)


class DocsClientQuip(DocsClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=DEFAULT_BASE_URL, val_type="string")
        self._api_token = self.get_config_val("API_TOKEN", default=None, val_type="string")
        self._normalizer = QuipResponseNormalizer(logger=self.logging)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Quip"

    def _get_supported_content_formats(self) -> list[str]:
        return ["html", "markdown"]

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=DEFAULT_BASE_URL),
            EnvConfig(env_key="API_TOKEN", val_type="string", default=None),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        return {"Authorization": f"Bearer {self._api_token}"}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/users/current"

    def _get_endpoint_document(self, document_id: str) -> str:
        return f"/threads/{quote(document_id, safe='')}"

    def _get_endpoint_create_document(self) -> str:
        return "/threads/new-document"

    def _get_endpoint_edit_document(self) -> str:
        return "/threads/edit-document"

    def _get_endpoint_delete_document(self) -> str:
        return "/threads/delete"

    def _get_endpoint_recent_documents(self, count: int) -> str:
        plain_url = "/threads/recent"
        if count and count > 0:
            plain_url += f"?count={count}"
        return plain_url

    def _get_endpoint_search(self, query: str, count: int) -> str:
        plain_url = f"/threads/search?query={quote_plus(query)}"
        if count and count > 0:
            plain_url += f"&count={count}"
        return plain_url

    def _get_endpoint_comments(self, document_id: str) -> str:
        return f"/threads/{quote(document_id, safe='')}/messages"

    def _get_endpoint_current_user(self) -> str:
        return "/users/current"

    def _get_endpoint_user(self, user_id: str) -> str:
        return f"/users/{quote(user_id, safe='')}"

    ################ PAYLOAD BUILDER ##################
    def _build_create_document_form(self, title: str, content: str, content_format: str) -> dict[str, str]:
        return {
            "title": title,
            "content": content,
            "format": content_format,
        }

    def _build_edit_document_form(self, document_id: str, content: str, operation: str, content_format: str) -> dict[str, str]:
        location = resolve_edit_location(operation)
        if location == EDIT_LOCATION_APPEND and (operation or "").strip().upper() != "APPEND":
            self.logging.warning("Edit operation %r is sent as an append; Quip has no replace-in-place.", operation)
        return {
            "thread_id": document_id,
            "content": content,
            "location": location,
            "format": content_format,
        }

    def _build_delete_document_form(self, document_id: str) -> dict[str, str]:
        return {
            "thread_id": document_id,
            "wipeout": "false",
        }

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    ############### LIST RESPONSES ###############
    def _parse_endpoint_recent_documents(self, raw: bytes) -> list[Document]:
        return self._normalizer.normalize_recent_documents(raw)

    def _parse_endpoint_search(self, raw: bytes) -> SearchResult:
        return self._normalizer.normalize_search_result(raw)

    def _parse_endpoint_comments(self, raw: bytes) -> list[Comment]:
        return self._normalizer.normalize_comments(raw)

    ############### GET RESPONSES ###############
    def _parse_endpoint_document(self, raw: bytes) -> Document:
        return self._normalizer.normalize_document(raw)

    def _parse_endpoint_created_document(self, raw: bytes) -> Document:
        return self._normalizer.normalize_created_document(raw)

    def _parse_endpoint_edited_document(self, raw: bytes) -> Document:
        return self._normalizer.normalize_edited_document(raw)

    def _parse_endpoint_user(self, raw: bytes) -> User:
        return self._normalizer.normalize_user(raw)
