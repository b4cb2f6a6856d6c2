"""Line-oriented text files used around the database builder.

- links file: one beatmap reference per line, ``#`` comments allowed
- hash cache: one ``checksum|mapset_id`` line per fetched beatmap
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from collectiondb._internal.format_contract import CACHE_FIELD_SEPARATOR, LINKS_COMMENT_PREFIX


class CacheEntry(BaseModel):
    """One line of the hash cache."""
    checksum: str
    mapset_id: Optional[int] = None


def read_reference_lines(path: Union[str, Path]) -> List[str]:
    """Return stripped, non-empty, non-comment lines of a links file."""
    text = Path(path).read_text(encoding="utf-8")
    lines = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(LINKS_COMMENT_PREFIX):
            continue
        lines.append(line)
    return lines


def write_hash_cache(path: Union[str, Path], entries: Iterable[CacheEntry]) -> int:
    """Overwrite the cache file with ``entries``.

    Returns:
        Number of lines written
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for entry in entries:
            mapset = "" if entry.mapset_id is None else str(entry.mapset_id)
            f.write(f"{entry.checksum}{CACHE_FIELD_SEPARATOR}{mapset}\n")
            count += 1
    return count


def read_hash_cache(path: Union[str, Path]) -> List[CacheEntry]:
    """Read cache entries in file order.

    Only the first field is required; lines whose first field is blank are
    skipped. Checksums are returned as written (validation happens later).
    """
    entries: List[CacheEntry] = []
    text = Path(path).read_text(encoding="utf-8")
    for line in text.splitlines():
        fields = line.split(CACHE_FIELD_SEPARATOR)
        checksum = fields[0].strip()
        if not checksum:
            continue
        mapset_id: Optional[int] = None
        if len(fields) > 1 and fields[1].strip().isdigit():
            mapset_id = int(fields[1].strip())
        entries.append(CacheEntry(checksum=checksum, mapset_id=mapset_id))
    return entries
