"""Drive a beatmap lookup service over a list of references.

The service itself is a collaborator supplied by the caller (anything with a
``lookup(beatmap_id)`` method); this module only handles ordering, pacing and
failure bookkeeping.
"""

from typing import Iterable, List, Optional, Protocol

from pydantic import BaseModel, Field

from collectiondb.codes import ErrorCode
from collectiondb.kernel.errors import LookupFailed
from collectiondb._internal.io.text_files import CacheEntry
from .ratelimit import RateLimiter
from .references import parse_beatmap_reference


class BeatmapInfo(BaseModel):
    """Lookup result for one beatmap."""
    beatmap_id: int
    checksum: Optional[str] = None  # Service may omit it
    mapset_id: int


class BeatmapLookup(Protocol):
    def lookup(self, beatmap_id: int) -> BeatmapInfo:
        """Return the beatmap's info, raising LookupFailed on service errors."""
        ...


class FetchFailure(BaseModel):
    reference: str
    code: ErrorCode
    reason: str


class FetchResult(BaseModel):
    """Successful lookups and failures, each in input order."""
    fetched: List[BeatmapInfo] = Field(default_factory=list)
    failures: List[FetchFailure] = Field(default_factory=list)

    @property
    def checksums(self) -> List[str]:
        return [info.checksum for info in self.fetched if info.checksum is not None]

    def cache_entries(self) -> List[CacheEntry]:
        return [
            CacheEntry(checksum=info.checksum, mapset_id=info.mapset_id)
            for info in self.fetched
            if info.checksum is not None
        ]


def fetch_checksums(
    references: Iterable[str],
    lookup: BeatmapLookup,
    rate_limiter: RateLimiter,
) -> FetchResult:
    """Look up each reference in order, collecting checksums and failures.

    Unparseable references are recorded without calling the service or
    consuming a rate-limit slot. Failures never stop the loop.
    """
    result = FetchResult()
    for reference in references:
        beatmap_id = parse_beatmap_reference(reference)
        if beatmap_id is None:
            result.failures.append(FetchFailure(
                reference=reference,
                code=ErrorCode.INVALID_REFERENCE,
                reason="Invalid URL format",
            ))
            continue

        rate_limiter.acquire()
        try:
            info = lookup.lookup(beatmap_id)
        except LookupFailed as exc:
            result.failures.append(FetchFailure(
                reference=reference,
                code=ErrorCode.LOOKUP_FAILED,
                reason=str(exc),
            ))
            continue

        if info.checksum is None:
            result.failures.append(FetchFailure(
                reference=reference,
                code=ErrorCode.MISSING_CHECKSUM,
                reason=f"Beatmap {beatmap_id} missing checksum",
            ))
            continue
        result.fetched.append(info)
    return result
