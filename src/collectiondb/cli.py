"""collectiondb CLI: build and inspect collection database files."""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path

from collectiondb._internal.format_contract import (
    DEFAULT_CACHE_FILENAME,
    DEFAULT_CLIENT_VERSION,
    DEFAULT_LINKS_FILENAME,
    DEFAULT_OUTPUT_FILENAME,
)
from collectiondb.kernel.model import INT32_MAX, INT32_MIN


def _print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _int32(text: str) -> int:
    """argparse type for values written as a signed 32-bit integer."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if not INT32_MIN <= value <= INT32_MAX:
        raise argparse.ArgumentTypeError(
            f"{value} does not fit in a signed 32-bit integer ({INT32_MIN}..{INT32_MAX})"
        )
    return value


def _run_build(args) -> None:
    from collectiondb.api import build_collection, write_database_file
    from collectiondb._internal.io.text_files import read_hash_cache

    entries = read_hash_cache(args.hashes)
    result = build_collection(
        [entry.checksum for entry in entries],
        name=args.name,
        version=args.client_version,
    )
    report = result.collections[0]

    if report.rejected:
        print(f"Rejected {len(report.rejected)} malformed checksum(s):", file=sys.stderr)
        for rejected in report.rejected:
            print(f"  - line {rejected.index + 1}: {rejected.message}", file=sys.stderr)

    if report.accepted_count == 0:
        _print_error(f"No valid checksums found in {args.hashes}")
        sys.exit(1)

    written = write_database_file(result.database, args.out)
    if not args.quiet:
        print("[OK] Collection saved")
        print(f"  Output: {args.out}")
        print(f"  Collection: {args.name if args.name is not None else '(unnamed)'}")
        print(f"  Checksums: {report.accepted_count}")
        print(f"  Rejected: {len(report.rejected)}")
        print(f"  Bytes: {written}")


def _run_inspect(args) -> None:
    from collectiondb.api import read_database_file, summarize_database
    from collectiondb._internal.canonical_json import canonical_dumps

    database = read_database_file(args.path, strict=args.strict)
    if args.json:
        print(canonical_dumps(database.model_dump()))
        return

    summary = summarize_database(database)
    if args.quiet:
        return
    print(f"Version: {summary.version}")
    print(f"Collections: {summary.collection_count}")
    print(f"Checksums: {summary.hash_count}")
    for collection in summary.collections:
        name = collection.name if collection.name is not None else "(unnamed)"
        line = f"  - {name}: {collection.hash_count}"
        if collection.absent_hash_count:
            line += f" ({collection.absent_hash_count} absent)"
        print(line)


def _run_refs(args) -> None:
    from collectiondb.lookup.references import parse_references
    from collectiondb._internal.io.text_files import read_reference_lines

    result = parse_references(read_reference_lines(args.links))
    if not args.quiet:
        for beatmap_id in result.ids:
            print(beatmap_id)
    for line in result.invalid:
        print(f"Invalid reference: {line}", file=sys.stderr)
    if not args.quiet:
        print(f"  Parsed: {len(result.ids)}", file=sys.stderr)
        print(f"  Invalid: {len(result.invalid)}", file=sys.stderr)
    if result.invalid:
        sys.exit(1)


def main():
    """Main CLI entry point for collectiondb commands."""
    try:
        collectiondb_version = get_version("collectiondb")
    except PackageNotFoundError:
        collectiondb_version = "dev"

    parser = argparse.ArgumentParser(
        prog="collectiondb",
        description="collectiondb: build and inspect collection database files"
    )
    parser.add_argument("--version", action="version", version=f"collectiondb {collectiondb_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build a collection database from a hash cache file",
        parents=[parent_parser]
    )
    build_parser.add_argument(
        "--hashes",
        type=Path,
        default=Path(DEFAULT_CACHE_FILENAME),
        help=f"Hash cache file, one 'checksum|mapset_id' per line (defaults to '{DEFAULT_CACHE_FILENAME}')"
    )
    build_parser.add_argument(
        "--name",
        default=None,
        help="Collection name shown by the client (omitted if not given)"
    )
    build_parser.add_argument(
        "--client-version",
        dest="client_version",
        type=_int32,
        default=DEFAULT_CLIENT_VERSION,
        help=f"Client version stamp written to the file (defaults to {DEFAULT_CLIENT_VERSION})"
    )
    build_parser.add_argument(
        "--out",
        type=Path,
        default=Path(DEFAULT_OUTPUT_FILENAME),
        help=f"Output database path (defaults to '{DEFAULT_OUTPUT_FILENAME}')"
    )

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the contents of a collection database",
        parents=[parent_parser]
    )
    inspect_parser.add_argument(
        "path",
        type=Path,
        help="Path to collection database"
    )
    inspect_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if bytes remain after the last collection"
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full database as canonical JSON"
    )

    # refs command
    refs_parser = subparsers.add_parser(
        "refs",
        help="Extract beatmap ids from a links file",
        parents=[parent_parser]
    )
    refs_parser.add_argument(
        "links",
        type=Path,
        nargs="?",
        default=Path(DEFAULT_LINKS_FILENAME),
        help=f"Links file, one URL or id per line (defaults to '{DEFAULT_LINKS_FILENAME}')"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    from collectiondb.kernel.errors import CollectionDbError

    handlers = {
        "build": _run_build,
        "inspect": _run_inspect,
        "refs": _run_refs,
    }
    try:
        handlers[args.command](args)
    except (CollectionDbError, OSError) as exc:
        _print_error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
