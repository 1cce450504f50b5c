"""Ordered candidate decoding of loosely-typed JSON responses.

A ShapeCascade holds an ordered list of ShapeCandidate units. Each candidate either
raises a pydantic ValidationError (structural mismatch) or returns a decoded value,
which is then checked by the candidate's validity predicate. The first candidate whose
value is valid wins; new response shapes are appended without touching earlier steps.

Ordering is empirical: a future response shape could still satisfy an earlier, wrong
candidate. The non-empty id predicates below are the gate against that.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from pydantic import ValidationError

from shared.models.errors import DecodeError

T = TypeVar("T")


@dataclass(frozen=True)
class ShapeCandidate(Generic[T]):
    """
    One candidate decoding of a response body.

    Attributes:
        name (str): Short label used in logs (e.g. "sideband-html-wrapper").
        decode (Callable[[Any], T]): Builds the value from parsed JSON, raising ValidationError on mismatch.
        is_valid (Callable[[T], bool]): Accepts or rejects a structurally decoded value.
    """

    name: str
    decode: Callable[[Any], T]
    is_valid: Callable[[T], bool]


########### VALIDITY PREDICATES ###########

def has_id(record: Any) -> bool:
    """True if the record carries a non-empty id."""
    return bool(getattr(record, "id", ""))


def all_have_ids(records: Sequence[Any]) -> bool:
    """True if every record carries a non-empty id. An empty sequence is valid."""
    return all(has_id(record) for record in records)


def non_empty_and_all_have_ids(records: Sequence[Any]) -> bool:
    """True if there is at least one record and every record carries a non-empty id."""
    return len(records) > 0 and all_have_ids(records)


class ShapeCascade(Generic[T]):
    """Runs candidates in order over a raw body and returns the first valid value."""

    def __init__(self, operation: str, candidates: list[ShapeCandidate[T]], logger: logging.Logger | None = None) -> None:
        if not candidates:
            raise ValueError(f"Cascade for '{operation}' needs at least one candidate.")
        self.operation = operation
        self.candidates = list(candidates)
        self.logging = logger or logging.getLogger(__name__)

    def get_candidate_names(self) -> list[str]:
        return [candidate.name for candidate in self.candidates]

    def resolve(self, raw: bytes) -> T:
        """Decode a raw response body.

        Args:
            raw (bytes): The raw response body.

        Returns:
            T: The value of the first candidate that decodes and is valid.

        Raises:
            DecodeError: If the body is not JSON, or no candidate yields a valid value.
        """
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Failed to decode {self.operation} response: malformed JSON ({e})", raw) from e

        for candidate in self.candidates:
            try:
                value = candidate.decode(payload)
            except ValidationError as e:
                self.logging.debug("%s: shape '%s' did not match (%d errors)", self.operation, candidate.name, e.error_count())
                continue
            if candidate.is_valid(value):
                self.logging.debug("%s: matched shape '%s'", self.operation, candidate.name)
                return value
            self.logging.debug("%s: shape '%s' decoded without a valid id, trying next", self.operation, candidate.name)

        raise DecodeError(f"Unrecognized {self.operation} response format", raw)
