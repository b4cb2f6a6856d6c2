"""Error code constants for collectiondb.

These constants prevent stringly-typed error codes and let callers
branch on the cause of a failure instead of its message text.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by every collectiondb exception and report entry."""

    # Format errors (decode-time, not recoverable mid-parse)
    UNEXPECTED_EOF = "UNEXPECTED_EOF"
    INVALID_STRING_MARKER = "INVALID_STRING_MARKER"
    LENGTH_OVERFLOW = "LENGTH_OVERFLOW"
    INVALID_UTF8 = "INVALID_UTF8"
    INVALID_COUNT = "INVALID_COUNT"
    TRAILING_BYTES = "TRAILING_BYTES"

    # Validation errors (recoverable, entry is dropped)
    MALFORMED_CHECKSUM = "MALFORMED_CHECKSUM"

    # Sink/source failures
    IO_ERROR = "IO_ERROR"

    # Lookup collaborator failures
    INVALID_REFERENCE = "INVALID_REFERENCE"
    LOOKUP_FAILED = "LOOKUP_FAILED"
    MISSING_CHECKSUM = "MISSING_CHECKSUM"
