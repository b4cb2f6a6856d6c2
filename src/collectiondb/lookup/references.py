"""Parse human-supplied beatmap references into numeric beatmap ids."""

from typing import Iterable, List, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, Field


UINT32_MAX = 2**32 - 1

# First path segment that precedes a beatmap id, e.g. /beatmaps/123 or /b/123
_BEATMAP_PATH_PREFIXES = ("beatmaps", "b")


def _parse_id(text: str) -> Optional[int]:
    # A single leading "+" is accepted, as unsigned integer parsing in the client tooling does
    if text.startswith("+"):
        text = text[1:]
    if not text.isascii() or not text.isdigit():
        return None
    value = int(text)
    if value > UINT32_MAX:
        return None
    return value


def parse_beatmap_reference(text: str) -> Optional[int]:
    """Extract a beatmap id from a bare id or a beatmap URL.

    Accepted forms:
    - ``"129891"``
    - ``https://host/beatmaps/129891`` or ``https://host/b/129891``
    - ``https://host/beatmapsets/41823#osu/129891`` (fragment ``mode/id``)

    Returns:
        The beatmap id, or None if the reference is not recognised
    """
    text = text.strip()
    bare = _parse_id(text)
    if bare is not None:
        return bare

    try:
        parts = urlsplit(text)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None

    segments = parts.path.split("/")[1:]
    if len(segments) >= 2 and segments[0] in _BEATMAP_PATH_PREFIXES:
        return _parse_id(segments[1])

    if parts.fragment:
        fragment = parts.fragment.split("/")
        # fragment[0] is the game mode (osu, taiko, fruits, mania)
        if len(fragment) == 2:
            return _parse_id(fragment[1])

    return None


class ReferenceParseResult(BaseModel):
    ids: List[int] = Field(default_factory=list)
    invalid: List[str] = Field(default_factory=list)


def parse_references(lines: Iterable[str]) -> ReferenceParseResult:
    """Parse every line, keeping ids in order and collecting unrecognised lines."""
    result = ReferenceParseResult()
    for line in lines:
        beatmap_id = parse_beatmap_reference(line)
        if beatmap_id is None:
            result.invalid.append(line)
        else:
            result.ids.append(beatmap_id)
    return result
