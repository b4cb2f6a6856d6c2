"""Collection database format kernel: codec, model, writer, reader, validator."""

from .checksum import ChecksumFilterResult, RejectedChecksum, filter_checksums, validate_checksum
from .errors import (
    ChecksumValidationError,
    CollectionDbError,
    DatabaseIOError,
    FormatError,
    InvalidCount,
    InvalidStringMarker,
    InvalidUtf8,
    LengthOverflow,
    MalformedChecksum,
    TrailingBytes,
    UnexpectedEof,
)
from .model import Collection, Database
from .reader import decode_database, read_database
from .strings import decode_string, encode_string
from .writer import encode_database, write_database

__all__ = [
    "Collection",
    "Database",
    "encode_string",
    "decode_string",
    "encode_database",
    "write_database",
    "decode_database",
    "read_database",
    "validate_checksum",
    "filter_checksums",
    "ChecksumFilterResult",
    "RejectedChecksum",
    "CollectionDbError",
    "FormatError",
    "UnexpectedEof",
    "InvalidStringMarker",
    "LengthOverflow",
    "InvalidUtf8",
    "InvalidCount",
    "TrailingBytes",
    "ChecksumValidationError",
    "MalformedChecksum",
    "DatabaseIOError",
]
