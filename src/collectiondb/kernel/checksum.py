"""Checksum shape validation.

A checksum is accepted iff it is exactly 32 characters from ``[0-9a-f]``
(an MD5 digest rendered as lowercase hex text).
"""

import re
from typing import Iterable, List

from pydantic import BaseModel, Field

from .errors import MalformedChecksum


CHECKSUM_LENGTH = 32

_CHECKSUM_RE = re.compile(r"[0-9a-f]{32}")
_HEX_RE = re.compile(r"[0-9a-fA-F]*")


class RejectedChecksum(BaseModel):
    """A value dropped by filter_checksums."""
    index: int  # Position in the input sequence
    value: str  # repr() for non-string inputs
    reason: str  # not_a_string | wrong_length | uppercase_hex | non_hex
    message: str


class ChecksumFilterResult(BaseModel):
    """Outcome of a best-effort batch validation."""
    accepted: List[str] = Field(default_factory=list)
    rejected: List[RejectedChecksum] = Field(default_factory=list)


def validate_checksum(value: str) -> None:
    """Raise MalformedChecksum unless ``value`` is a lowercase hex MD5 digest."""
    if not isinstance(value, str):
        raise MalformedChecksum(value, "not_a_string", f"got {type(value).__name__}")
    if len(value) != CHECKSUM_LENGTH:
        raise MalformedChecksum(
            value, "wrong_length", f"expected {CHECKSUM_LENGTH} characters, got {len(value)}"
        )
    if _CHECKSUM_RE.fullmatch(value):
        return
    if _HEX_RE.fullmatch(value):
        raise MalformedChecksum(value, "uppercase_hex", "hex digits must be lowercase")
    raise MalformedChecksum(value, "non_hex", "only 0-9 and a-f are allowed")


def is_valid_checksum(value: str) -> bool:
    try:
        validate_checksum(value)
    except MalformedChecksum:
        return False
    return True


def filter_checksums(values: Iterable[str]) -> ChecksumFilterResult:
    """Split ``values`` into accepted checksums and rejected entries.

    Rejections never abort the batch. Accepted order follows input order;
    an empty accepted list is returned as-is.
    """
    result = ChecksumFilterResult()
    for index, value in enumerate(values):
        try:
            validate_checksum(value)
        except MalformedChecksum as exc:
            result.rejected.append(RejectedChecksum(
                index=index,
                value=value if isinstance(value, str) else repr(value),
                reason=exc.reason,
                message=exc.message,
            ))
            continue
        result.accepted.append(value)
    return result
