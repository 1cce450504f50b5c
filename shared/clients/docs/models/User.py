"""Canonical user model."""

from pydantic import Field

from shared.clients.docs.models.WireModel import WireModel


class User(WireModel):
    """
    Represents a single user as returned by a docs client.

    Unlike Document and Comment, the service reports user timestamps in SECONDS.
    The unit is kept as sent; converting it would diverge from the wire.
    """
    id: str = ""
    name: str = ""
    email: str = ""
    url: str = ""
    created_at: int = Field(default=0, alias="created")
    updated_at: int = Field(default=0, alias="updated")
    profile_picture_url: str = ""
    affinity: float = 0.0
    desktop: bool = False
    emails: list[str] = []
    chat_only: bool = False
