"""Public API for collectiondb.

High-level functions that return complete, structured results. Callers
should use these instead of importing from _internal.
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from collectiondb.kernel.checksum import RejectedChecksum, filter_checksums
from collectiondb.kernel.errors import DatabaseIOError
from collectiondb.kernel.model import Collection, Database
from collectiondb.kernel.reader import read_database
from collectiondb.kernel.writer import write_database
from collectiondb._internal.format_contract import DEFAULT_CLIENT_VERSION


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _new_file_mode(target: Path) -> int:
    """Mode a plain open() would give ``target``: its current mode, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class CollectionReport(BaseModel):
    """Validation outcome for one collection."""
    name: Optional[str]
    accepted_count: int
    rejected: List[RejectedChecksum] = Field(default_factory=list)


class BuildResult(BaseModel):
    """Result of assembling a Database from caller-supplied checksums."""
    database: Database
    collections: List[CollectionReport]

    @property
    def rejected_count(self) -> int:
        return sum(len(report.rejected) for report in self.collections)

    @property
    def empty_collections(self) -> List[Optional[str]]:
        """Names of collections left with no valid checksum."""
        return [report.name for report in self.collections if report.accepted_count == 0]

    @property
    def ok(self) -> bool:
        """True if nothing was rejected."""
        return self.rejected_count == 0


class CollectionSummary(BaseModel):
    name: Optional[str]
    hash_count: int
    absent_hash_count: int


class DatabaseSummary(BaseModel):
    """Shape of a database, for display."""
    version: int
    collection_count: int
    hash_count: int
    collections: List[CollectionSummary]


def build_database(
    collections: Iterable[Tuple[Optional[str], Iterable[str]]],
    version: int = DEFAULT_CLIENT_VERSION,
) -> BuildResult:
    """
    Validate checksums and assemble a Database.

    Malformed checksums are dropped and reported per collection; the build
    always continues. A collection that ends up empty is kept (zero-length)
    and listed in ``BuildResult.empty_collections`` so the caller can decide.

    Args:
        collections: (name, checksums) pairs, in the order they should appear
        version: Client version stamp

    Returns:
        BuildResult with the database and per-collection reports
    """
    built: List[Collection] = []
    reports: List[CollectionReport] = []
    for name, checksums in collections:
        filtered = filter_checksums(checksums)
        built.append(Collection(name=name, hashes=list(filtered.accepted)))
        reports.append(CollectionReport(
            name=name,
            accepted_count=len(filtered.accepted),
            rejected=filtered.rejected,
        ))
    return BuildResult(
        database=Database(version=version, collections=built),
        collections=reports,
    )


def build_collection(
    checksums: Iterable[str],
    name: Optional[str] = None,
    version: int = DEFAULT_CLIENT_VERSION,
) -> BuildResult:
    """Build a single-collection database."""
    return build_database([(name, checksums)], version=version)


def write_database_file(
    database: Database,
    path: Union[str, os.PathLike, Path],
    atomic: bool = True,
) -> int:
    """
    Write ``database`` to ``path``.

    With ``atomic=True`` the bytes go to a temporary file in the target
    directory which replaces ``path`` only after a complete write; on any
    failure the temporary file is removed and ``path`` is left untouched.

    Returns:
        Number of bytes written

    Raises:
        DatabaseIOError: If opening, writing or replacing fails
    """
    target = _normalize_path(path)
    if not atomic:
        try:
            with open(target, "wb") as f:
                return write_database(database, f)
        except DatabaseIOError:
            raise
        except OSError as exc:
            raise DatabaseIOError(f"Cannot write {target}: {exc}") from exc

    directory = target.parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise DatabaseIOError(f"Cannot create temporary file in {directory}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            written = write_database(database, f)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _new_file_mode(target))
        os.replace(tmp_path, target)
    except BaseException as exc:
        tmp_path.unlink(missing_ok=True)
        if isinstance(exc, OSError) and not isinstance(exc, DatabaseIOError):
            raise DatabaseIOError(f"Cannot write {target}: {exc}") from exc
        raise
    return written


def read_database_file(
    path: Union[str, os.PathLike, Path],
    strict: bool = False,
) -> Database:
    """
    Read a collection database file.

    Raises:
        DatabaseIOError: If the file cannot be opened or read
        FormatError: If the contents do not follow the format
    """
    source = _normalize_path(path)
    try:
        f = open(source, "rb")
    except OSError as exc:
        raise DatabaseIOError(f"Cannot open {source}: {exc}") from exc
    with f:
        return read_database(f, strict=strict)


def summarize_database(database: Database) -> DatabaseSummary:
    """Collection names and hash counts, in file order."""
    return DatabaseSummary(
        version=database.version,
        collection_count=len(database.collections),
        hash_count=database.hash_count,
        collections=[
            CollectionSummary(
                name=collection.name,
                hash_count=len(collection.hashes),
                absent_hash_count=sum(1 for h in collection.hashes if h is None),
            )
            for collection in database.collections
        ],
    )
