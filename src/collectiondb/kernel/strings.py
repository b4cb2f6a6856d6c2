"""String codec for the collection database format.

Every textual field (collection name, each checksum) is stored as:

- ``0x00``: absent value, nothing follows
- ``0x0b``: present value, followed by the UTF-8 byte length as an
  unsigned LEB128 integer, followed by the raw UTF-8 bytes (no terminator)

This is the only place the marker/length rules are implemented; the writer
and reader both go through it.
"""

from typing import Optional, Tuple

from .errors import InvalidStringMarker, InvalidUtf8, LengthOverflow, UnexpectedEof


STRING_ABSENT = 0x00
STRING_PRESENT = 0x0B

MAX_STRING_LENGTH = 2**31 - 1
MAX_ULEB128_BYTES = 5  # 35 data bits, enough for any int32 length


def encode_uleb128(value: int) -> bytes:
    """Encode a non-negative integer as unsigned LEB128.

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"ULEB128 cannot encode negative value {value}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            break
    return bytes(out)


def decode_uleb128(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Decode an unsigned LEB128 integer starting at ``offset``.

    Args:
        data: Buffer to read from
        offset: Position of the first byte of the integer

    Returns:
        (value, bytes consumed)

    Raises:
        UnexpectedEof: If the buffer ends before the final byte
        LengthOverflow: If the chain exceeds MAX_ULEB128_BYTES or the value
            exceeds MAX_STRING_LENGTH
    """
    value = 0
    shift = 0
    pos = offset
    while True:
        if pos - offset >= MAX_ULEB128_BYTES:
            raise LengthOverflow(offset, f"continuation chain longer than {MAX_ULEB128_BYTES} bytes")
        if pos >= len(data):
            raise UnexpectedEof(pos, 1, 0, what="string length")
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        shift += 7
        if not byte & 0x80:
            break
    if value > MAX_STRING_LENGTH:
        raise LengthOverflow(offset, f"length {value} exceeds {MAX_STRING_LENGTH}")
    return value, pos - offset


def encode_string(text: Optional[str]) -> bytes:
    """Encode an optional string in marker + ULEB128 length + UTF-8 form."""
    if text is None:
        return bytes((STRING_ABSENT,))
    payload = text.encode("utf-8")
    if len(payload) > MAX_STRING_LENGTH:
        raise ValueError(f"String of {len(payload)} bytes exceeds {MAX_STRING_LENGTH}")
    return bytes((STRING_PRESENT,)) + encode_uleb128(len(payload)) + payload


def decode_string(data: bytes, offset: int = 0) -> Tuple[Optional[str], int]:
    """Decode one encoded string starting at ``offset``.

    Returns:
        (text or None, bytes consumed)

    Raises:
        UnexpectedEof, InvalidStringMarker, LengthOverflow, InvalidUtf8
    """
    if offset >= len(data):
        raise UnexpectedEof(offset, 1, 0, what="string marker")
    marker = data[offset]
    if marker == STRING_ABSENT:
        return None, 1
    if marker != STRING_PRESENT:
        raise InvalidStringMarker(marker, offset)

    length, length_size = decode_uleb128(data, offset + 1)
    start = offset + 1 + length_size
    available = len(data) - start
    if length > available:
        raise UnexpectedEof(start, length, available, what="string payload")

    payload = bytes(data[start:start + length])
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8(start + exc.start, exc.reason) from exc
    return text, 1 + length_size + length
