"""Helpers around the external beatmap lookup service.

Nothing here speaks a network protocol: callers supply a BeatmapLookup
implementation and a RateLimiter.
"""

from .fetch import BeatmapInfo, BeatmapLookup, FetchFailure, FetchResult, fetch_checksums
from .ratelimit import FixedIntervalGate, NoDelay, RateLimiter
from .references import ReferenceParseResult, parse_beatmap_reference, parse_references

__all__ = [
    "BeatmapInfo",
    "BeatmapLookup",
    "FetchFailure",
    "FetchResult",
    "fetch_checksums",
    "FixedIntervalGate",
    "NoDelay",
    "RateLimiter",
    "ReferenceParseResult",
    "parse_beatmap_reference",
    "parse_references",
]
