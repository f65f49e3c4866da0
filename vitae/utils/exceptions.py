"""Custom exceptions shared across VITAE contexts."""

from pathlib import Path
from typing import Optional


class MalformedDocumentError(ValueError):
    """
    Exception raised when an external JSON document cannot be read or decoded.

    Raised only at the I/O boundary (file loading). Core functions never raise
    this; they treat odd-but-parseable input as "use fallback".

    Attributes:
        message: Error description
        source_path: File that failed to load
        snippet: Leading part of the undecodable content
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        snippet: Optional[str] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.snippet = snippet

        parts = [message]

        if source_path:
            parts.append(f"File: {source_path}")

        if snippet:
            # Truncate snippet if too long
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nContent:\n{snippet}")

        super().__init__("\n".join(parts))


class RecordNotFoundError(LookupError):
    """
    Exception raised when a record does not exist or is owned by another user.

    Attributes:
        kind: Record kind ("experience", "template", ...)
        record_id: Identifier that was looked up
    """

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"No {kind} with id '{record_id}' for this user")


class InvalidRecordError(ValueError):
    """
    Exception raised when a record write is missing a required field.

    Attributes:
        kind: Record kind
        field_name: Name of the offending field
    """

    def __init__(self, kind: str, field_name: str, message: Optional[str] = None):
        self.kind = kind
        self.field_name = field_name
        super().__init__(message or f"{kind} requires a non-empty '{field_name}'")
