"""Canonical comment model."""

from pydantic import Field

from shared.clients.docs.models.WireModel import WireModel


class Comment(WireModel):
    """
    Represents a single comment (message) on a document. Timestamps are microseconds.
    An empty parent_id marks a top-level comment.
    """
    id: str = ""
    text: str = ""
    author_id: str = ""
    created_at: int = Field(default=0, alias="created_usec")
    updated_at: int = Field(default=0, alias="updated_usec")
    parent_id: str = ""
    visible: bool = False
