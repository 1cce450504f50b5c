from pydantic import BaseModel, ConfigDict

from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.User import User


class SearchResult(BaseModel):
    """
    Result of a document search. Documents keep the relevance order of the server.
    The search endpoint never returns users, so users stays empty.
    """
    model_config = ConfigDict(frozen=True)

    documents: list[Document] = []
    users: list[User] = []
    next_cursor: str = ""
