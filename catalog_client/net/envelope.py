"""Decoding of the GraphQL ``{data, errors}`` response envelope."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from catalog_client.errors import CatalogError, NotFound, ProtocolError

T = TypeVar("T")

NOT_FOUND_MARKER = "not found"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Payload region plus the server's error messages, in order."""

    data: Optional[Mapping[str, Any]]
    errors: Sequence[str] = field(default_factory=tuple)

    def unwrap(
        self,
        decoder: Optional[Callable[[Mapping[str, Any]], T]] = None,
    ) -> Any:
        """Return the decoded payload or raise the classified error.

        When errors are present the payload is never decoded; only the first
        message is inspected.
        """
        if self.errors:
            raise classify_error_message(self.errors[0])
        if self.data is None:
            raise ProtocolError("null data without errors")
        if decoder is None:
            return self.data
        try:
            return decoder(self.data)
        except (AttributeError, KeyError, TypeError, ValueError) as error:
            raise ProtocolError(f"failed to decode data: {error}") from error


def classify_error_message(message: str) -> CatalogError:
    """Map a GraphQL error message onto the error taxonomy.

    A case-insensitive "not found" substring is the only signal the catalog
    gives for missing entities.
    """
    if NOT_FOUND_MARKER in message.lower():
        return NotFound(message)
    return ProtocolError(f"graphql error: {message}")


def decode_envelope(body: Any) -> ResponseEnvelope:
    """Validate the shape of a parsed JSON body and wrap it."""
    if not isinstance(body, Mapping):
        raise ProtocolError(
            f"unexpected response body type: {type(body).__name__}"
        )

    data = body.get("data")
    if data is not None and not isinstance(data, Mapping):
        raise ProtocolError(
            f"unexpected data type: {type(data).__name__}"
        )

    raw_errors = body.get("errors") or []
    if not isinstance(raw_errors, list):
        raise ProtocolError("errors must be a list")

    messages = []
    for entry in raw_errors:
        if isinstance(entry, Mapping):
            messages.append(str(entry.get("message") or ""))
        else:
            messages.append(str(entry))

    return ResponseEnvelope(data=data, errors=tuple(messages))
