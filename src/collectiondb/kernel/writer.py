"""Serialize a Database to the on-disk collection database layout.

Layout (little-endian, int32 = 4-byte signed):

    version            int32
    collection count   int32
    per collection:
        name           encoded string
        hash count     int32
        per hash:      encoded string
"""

import io
import struct
from typing import BinaryIO

from .errors import DatabaseIOError
from .model import INT32_MAX, Database
from .strings import encode_string


_INT32 = struct.Struct("<i")


def _pack_count(count: int, what: str) -> bytes:
    if count > INT32_MAX:
        raise ValueError(f"{what} count {count} does not fit in a signed 32-bit integer")
    return _INT32.pack(count)


def write_database(database: Database, sink: BinaryIO) -> int:
    """Write ``database`` to ``sink`` in a single pass.

    Collections and hashes are written in model order. Writing stops on the
    first sink failure; the caller owns cleanup of a partially written sink.

    Args:
        database: Database to serialize
        sink: Binary file-like object opened for writing

    Returns:
        Number of bytes written

    Raises:
        DatabaseIOError: If the sink raises OSError
        ValueError: If a count does not fit in int32
    """
    written = 0

    def emit(chunk: bytes) -> None:
        nonlocal written
        try:
            sink.write(chunk)
        except OSError as exc:
            raise DatabaseIOError(
                f"Write failed after {written} byte(s): {exc}", bytes_done=written
            ) from exc
        written += len(chunk)

    emit(_INT32.pack(database.version))
    emit(_pack_count(len(database.collections), "collection"))
    for collection in database.collections:
        emit(encode_string(collection.name))
        emit(_pack_count(len(collection.hashes), "hash"))
        for checksum in collection.hashes:
            emit(encode_string(checksum))
    return written


def encode_database(database: Database) -> bytes:
    """Serialize ``database`` to an in-memory byte string."""
    buf = io.BytesIO()
    write_database(database, buf)
    return buf.getvalue()
