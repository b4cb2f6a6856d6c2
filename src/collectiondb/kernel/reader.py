"""Parse the on-disk collection database layout back into a Database.

The reader mirrors kernel.writer field by field. It never defaults or
truncates: any structural problem raises a FormatError carrying the byte
offset where it was detected.
"""

import struct
from typing import BinaryIO, List, Optional

from .errors import DatabaseIOError, InvalidCount, TrailingBytes, UnexpectedEof
from .model import Collection, Database
from .strings import decode_string


_INT32 = struct.Struct("<i")

# Smallest possible encoding of one element, used to reject counts that
# cannot fit in the remaining bytes before looping over them.
_MIN_HASH_SIZE = 1                       # absent marker
_MIN_COLLECTION_SIZE = 1 + _INT32.size   # absent name + zero hash count


class _Cursor:
    """Forward-only position over an in-memory buffer."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def read_int32(self, what: str) -> int:
        if self.remaining < _INT32.size:
            raise UnexpectedEof(self.pos, _INT32.size, self.remaining, what=what)
        (value,) = _INT32.unpack_from(self.data, self.pos)
        self.pos += _INT32.size
        return value

    def read_count(self, what: str, min_element_size: int) -> int:
        offset = self.pos
        count = self.read_int32(f"{what} count")
        if count < 0:
            raise InvalidCount(offset, count, what)
        needed = count * min_element_size
        if needed > self.remaining:
            raise UnexpectedEof(self.pos, needed, self.remaining, what=f"{count} {what}(s)")
        return count

    def read_string(self) -> Optional[str]:
        text, consumed = decode_string(self.data, self.pos)
        self.pos += consumed
        return text


def decode_database(data: bytes, strict: bool = False) -> Database:
    """Decode a complete collection database from ``data``.

    Args:
        data: Raw file contents
        strict: If True, bytes left after the last collection raise
            TrailingBytes; otherwise they are ignored

    Returns:
        Parsed Database

    Raises:
        FormatError: UnexpectedEof, InvalidStringMarker, LengthOverflow,
            InvalidUtf8, InvalidCount, or TrailingBytes (strict only)
    """
    cursor = _Cursor(bytes(data))
    version = cursor.read_int32("version")
    collection_count = cursor.read_count("collection", _MIN_COLLECTION_SIZE)

    collections: List[Collection] = []
    for _ in range(collection_count):
        name = cursor.read_string()
        hash_count = cursor.read_count("hash", _MIN_HASH_SIZE)
        hashes = [cursor.read_string() for _ in range(hash_count)]
        collections.append(Collection(name=name, hashes=hashes))

    if strict and cursor.remaining:
        raise TrailingBytes(cursor.pos, cursor.remaining)

    return Database(version=version, collections=collections)


def read_database(source: BinaryIO, strict: bool = False) -> Database:
    """Read and decode a collection database from a binary file-like object.

    Raises:
        DatabaseIOError: If the source raises OSError
        FormatError: See decode_database
    """
    try:
        data = source.read()
    except OSError as exc:
        raise DatabaseIOError(f"Read failed: {exc}") from exc
    return decode_database(data, strict=strict)
