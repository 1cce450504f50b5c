"""Error types shared by the docs clients and the MCP layer.

DocsClientError is the common base and the single failure channel of an operation.
TransportError means the HTTP exchange failed (connect, timeout, body read) and carries
no status. APIError carries a non-2xx status with the verbatim server body. DecodeError
means the body matched no known response shape. InputValidationError rejects a caller
argument before any network call.
"""

DECODE_EXCERPT_LENGTH = 500


class DocsClientError(Exception):
    """Base class for all errors raised by a docs client operation."""


class TransportError(DocsClientError):
    """The HTTP exchange itself failed (connect, timeout, read)."""


class APIError(DocsClientError):
    """The remote API answered with a non-2xx status code.

    Attributes:
        status_code (int): The HTTP status code.
        body (str): The raw response body text, not parsed.
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error {status_code}: {body}")


class DecodeError(DocsClientError):
    """The response body could not be normalized into a canonical record.

    Attributes:
        body_excerpt (str): Bounded prefix of the raw body for diagnosis.
    """

    def __init__(self, message: str, raw: bytes = b"") -> None:
        self.body_excerpt = raw[:DECODE_EXCERPT_LENGTH].decode("utf-8", errors="replace")
        super().__init__(f"{message}: {self.body_excerpt}" if self.body_excerpt else message)


class InputValidationError(DocsClientError):
    """A caller-supplied argument failed a precondition."""
