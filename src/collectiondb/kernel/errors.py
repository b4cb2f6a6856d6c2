"""Closed error taxonomy for the collection database format.

Every exception carries an ``ErrorCode`` so callers can branch on
``exc.code`` (or on the class) rather than on message text.
"""

from typing import Optional

from collectiondb.codes import ErrorCode


class CollectionDbError(Exception):
    """Base class for all collectiondb errors."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# --- format errors --------------------------------------------------------

class FormatError(CollectionDbError, ValueError):
    """The byte stream does not conform to the collection database format."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at byte offset {offset})")
        self.offset = offset


class UnexpectedEof(FormatError):
    """Fewer bytes remain than the next field requires."""
    code = ErrorCode.UNEXPECTED_EOF

    def __init__(self, offset: int, needed: int, available: int, what: str = "field"):
        super().__init__(
            f"Unexpected end of data reading {what}: needed {needed} byte(s), {available} available",
            offset,
        )
        self.needed = needed
        self.available = available
        self.what = what


class InvalidStringMarker(FormatError):
    """A string marker byte is neither 0x00 nor 0x0b."""
    code = ErrorCode.INVALID_STRING_MARKER

    def __init__(self, marker: int, offset: int):
        super().__init__(f"Invalid string marker byte 0x{marker:02x}", offset)
        self.marker = marker


class LengthOverflow(FormatError):
    """A ULEB128 length is too large or its continuation chain is too long."""
    code = ErrorCode.LENGTH_OVERFLOW

    def __init__(self, offset: int, detail: str):
        super().__init__(f"String length overflow: {detail}", offset)
        self.detail = detail


class InvalidUtf8(FormatError):
    """A string payload is not valid UTF-8."""
    code = ErrorCode.INVALID_UTF8

    def __init__(self, offset: int, reason: str):
        super().__init__(f"Invalid UTF-8 in string payload: {reason}", offset)
        self.reason = reason


class InvalidCount(FormatError):
    """A declared collection or hash count is negative."""
    code = ErrorCode.INVALID_COUNT

    def __init__(self, offset: int, count: int, what: str):
        super().__init__(f"Invalid {what} count {count}", offset)
        self.count = count
        self.what = what


class TrailingBytes(FormatError):
    """Unparsed bytes follow the last declared collection (strict mode only)."""
    code = ErrorCode.TRAILING_BYTES

    def __init__(self, offset: int, count: int):
        super().__init__(f"{count} trailing byte(s) after last collection", offset)
        self.count = count


# --- validation errors ----------------------------------------------------

class ChecksumValidationError(CollectionDbError, ValueError):
    """A value was rejected before being accepted into a collection."""


class MalformedChecksum(ChecksumValidationError):
    """A value is not a 32-character lowercase hexadecimal MD5 digest."""
    code = ErrorCode.MALFORMED_CHECKSUM

    def __init__(self, value: object, reason: str, detail: Optional[str] = None):
        message = f"Malformed checksum {value!r}: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.value = value
        self.reason = reason


# --- io errors ------------------------------------------------------------

class DatabaseIOError(CollectionDbError, OSError):
    """Reading from a source or writing to a sink failed."""
    code = ErrorCode.IO_ERROR

    def __init__(self, message: str, bytes_done: int = 0):
        super().__init__(message)
        self.bytes_done = bytes_done

    def __str__(self) -> str:
        return self.message


# --- lookup collaborator errors -------------------------------------------

class LookupFailed(CollectionDbError):
    """Raised by lookup implementations when the service call fails."""
    code = ErrorCode.LOOKUP_FAILED
