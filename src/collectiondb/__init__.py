"""collectiondb: reader/writer for the game client's collection database file."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("collectiondb")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from collectiondb.api import (
    BuildResult,
    DatabaseSummary,
    build_collection,
    build_database,
    read_database_file,
    summarize_database,
    write_database_file,
)
from collectiondb.codes import ErrorCode
from collectiondb.kernel.model import Collection, Database

__all__ = [
    "__version__",
    "build_database",
    "build_collection",
    "write_database_file",
    "read_database_file",
    "summarize_database",
    "BuildResult",
    "DatabaseSummary",
    "Collection",
    "Database",
    "ErrorCode",
]
