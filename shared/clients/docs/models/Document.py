"""Canonical document model, independent of the wire shape that carried it."""

from typing import Any

from pydantic import Field

from shared.clients.docs.models.WireModel import WireModel


class Document(WireModel):
    """
    Represents a single document ("thread") as returned by a docs client.

    Timestamps are microseconds since epoch, 0 means unknown. An empty html means the
    content was not fetched. A normalized Document always has a non-empty id.
    """
    id: str = ""
    type: str = ""
    title: str = ""
    created_at: int = Field(default=0, alias="created_usec")
    updated_at: int = Field(default=0, alias="updated_usec")
    author_id: str = ""
    html: str = ""
    link: str = ""
    access_level: str = ""
    is_template: bool = False
    thread_id: str = ""
    shared_folder_id: str = ""
    user_is_following: bool = False
    expanded_user_ids: list[str] = []
    access_levels: dict[str, Any] = {}
