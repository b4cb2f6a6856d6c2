"""Pydantic models for the in-memory collection database."""

from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Collection(BaseModel):
    """A named, ordered list of checksum references.

    ``name=None`` is a distinct state from ``name=""``: it is encoded with the
    absent marker. Hashes are not shape-checked here; see kernel.checksum.
    """
    name: Optional[str] = None
    hashes: List[Optional[str]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class Database(BaseModel):
    """Root entity: a client version stamp plus an ordered list of collections."""
    version: int  # Client build/date stamp, e.g. 20220906; stored verbatim
    collections: List[Collection] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator('version')
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Version is written as a signed 32-bit integer."""
        if not INT32_MIN <= v <= INT32_MAX:
            raise ValueError(f"version {v} does not fit in a signed 32-bit integer")
        return v

    @classmethod
    def from_pairs(
        cls,
        version: int,
        pairs: Iterable[Tuple[Optional[str], Sequence[Optional[str]]]],
    ) -> "Database":
        """Build a database from (name, hashes) pairs, preserving order."""
        return cls(
            version=version,
            collections=[Collection(name=name, hashes=list(hashes)) for name, hashes in pairs],
        )

    @property
    def hash_count(self) -> int:
        return sum(len(c.hashes) for c in self.collections)
