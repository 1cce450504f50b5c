"""Internal Pydantic models for Quip API response envelopes.

These models are only used inside QuipResponseNormalizer to recognise the wrapper
shapes the Quip API puts around a document. The rest of the application only sees the
canonical records in shared.clients.docs.models.

Shapes seen on the wire:
  bare document        the thread object itself, parsed straight into Document
  thread wrapper       {"thread": {...}}, see _ThreadEnvelope
  sideband wrapper     {"thread": {...}, "html": "...", ...}, html is a sibling of thread
  sideband map         {key: sideband wrapper, ...}
  thread wrapper list  [thread wrapper, ...]
"""

from pydantic import BaseModel, ConfigDict

from shared.clients.docs.models.Document import Document


class _ThreadEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    thread: Document


class _HtmlThreadEnvelope(BaseModel):
    # sideband fields (user_ids, shared_folder_ids, access_levels, ...) are kept but unused
    model_config = ConfigDict(extra="allow")

    thread: Document
    html: str | None = None

    def to_document(self) -> Document:
        """Return the wrapped document, taking html from the sideband field when it is non-empty."""
        if self.html:
            return self.thread.model_copy(update={"html": self.html})
        return self.thread
