"""Response normalizer for the Quip API.

Quip wraps the same document in different envelopes depending on the endpoint (and,
empirically, on whether rendered HTML is included), so every operation keeps its own
ordered cascade of candidate shapes. The normalizer is a pure function over bytes and
knows nothing about the transport.
"""

import logging

from pydantic import TypeAdapter

from shared.clients.docs.ShapeCascade import ShapeCandidate, ShapeCascade, all_have_ids, has_id, non_empty_and_all_have_ids
from shared.clients.docs.models.Comment import Comment
from shared.clients.docs.models.Document import Document
from shared.clients.docs.models.SearchResult import SearchResult
from shared.clients.docs.models.User import User
from shared.clients.docs.quip.models import _HtmlThreadEnvelope, _ThreadEnvelope

_DOCUMENT = TypeAdapter(Document)
_DOCUMENT_LIST = TypeAdapter(list[Document])
_HTML_ENVELOPE = TypeAdapter(_HtmlThreadEnvelope)
_HTML_ENVELOPE_MAP = TypeAdapter(dict[str, _HtmlThreadEnvelope])
_THREAD_ENVELOPE_LIST = TypeAdapter(list[_ThreadEnvelope])
_COMMENT_LIST = TypeAdapter(list[Comment])
_USER = TypeAdapter(User)


##########################################
########### CANDIDATE DECODERS ###########
##########################################

def decode_bare_document(payload) -> Document:
    """Bare document: the thread object itself."""
    return _DOCUMENT.validate_python(payload)


def decode_sideband_html_wrapper(payload) -> Document:
    """Sideband wrapper {thread, html, ...}: the html sibling overwrites thread.html when non-empty."""
    return _HTML_ENVELOPE.validate_python(payload).to_document()


def decode_bare_document_list(payload) -> list[Document]:
    """A plain JSON array of documents."""
    return _DOCUMENT_LIST.validate_python(payload)


def decode_sideband_wrapper_map(payload) -> list[Document]:
    """Sideband map {key: {thread, html}}: documents in the key order of the response."""
    envelopes = _HTML_ENVELOPE_MAP.validate_python(payload)
    return [envelope.to_document() for envelope in envelopes.values()]


def decode_thread_wrapper_list(payload) -> list[Document]:
    """Thread wrapper list [{thread}, ...]: documents in array order."""
    return [envelope.thread for envelope in _THREAD_ENVELOPE_LIST.validate_python(payload)]


class QuipResponseNormalizer:
    """Turns raw Quip response bodies into canonical records."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logging = logger or logging.getLogger(__name__)

        sideband = ShapeCandidate("sideband-html-wrapper", decode_sideband_html_wrapper, has_id)
        bare = ShapeCandidate("bare-document", decode_bare_document, has_id)

        self.document_cascade = ShapeCascade("get document", [sideband, bare], self.logging)
        # no fallback: a create response that is not a sideband wrapper is an error
        self.created_document_cascade = ShapeCascade("create document", [sideband], self.logging)
        self.edited_document_cascade = ShapeCascade("edit document", [sideband, bare], self.logging)
        self.recent_documents_cascade = ShapeCascade(
            "recent documents",
            [
                ShapeCandidate("sideband-wrapper-map", decode_sideband_wrapper_map, non_empty_and_all_have_ids),
                ShapeCandidate("bare-document-list", decode_bare_document_list, all_have_ids),
                ShapeCandidate("thread-wrapper-list", decode_thread_wrapper_list, all_have_ids),
            ],
            self.logging,
        )
        self.search_cascade = ShapeCascade(
            "search documents",
            [ShapeCandidate("thread-wrapper-list", decode_thread_wrapper_list, all_have_ids)],
            self.logging,
        )
        self.comments_cascade = ShapeCascade(
            "document comments",
            [ShapeCandidate("bare-comment-list", _COMMENT_LIST.validate_python, all_have_ids)],
            self.logging,
        )
        self.user_cascade = ShapeCascade(
            "user",
            [ShapeCandidate("bare-user", _USER.validate_python, has_id)],
            self.logging,
        )

    ##########################################
    ############## NORMALIZERS ###############
    ##########################################

    def normalize_document(self, raw: bytes) -> Document:
        return self.document_cascade.resolve(raw)

    def normalize_created_document(self, raw: bytes) -> Document:
        return self.created_document_cascade.resolve(raw)

    def normalize_edited_document(self, raw: bytes) -> Document:
        return self.edited_document_cascade.resolve(raw)

    def normalize_recent_documents(self, raw: bytes) -> list[Document]:
        return self.recent_documents_cascade.resolve(raw)

    def normalize_search_result(self, raw: bytes) -> SearchResult:
        """Search results always come as a thread wrapper list; the endpoint returns no users."""
        documents = self.search_cascade.resolve(raw)
        return SearchResult(documents=documents, users=[])

    def normalize_comments(self, raw: bytes) -> list[Comment]:
        return self.comments_cascade.resolve(raw)

    def normalize_user(self, raw: bytes) -> User:
        return self.user_cascade.resolve(raw)
