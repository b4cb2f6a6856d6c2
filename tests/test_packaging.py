"""Packaging regression tests.

Tests that verify the package structure and behavior.
"""

from pathlib import Path


def test_source_layout():
    """Package lives under src/ with its kernel and lookup subpackages."""
    here = Path(__file__).resolve().parent
    src_pkg = here.parent / "src" / "collectiondb"

    assert src_pkg.exists(), "collectiondb package should exist in src/"
    assert (src_pkg / "kernel").exists(), "collectiondb.kernel should exist"
    assert (src_pkg / "lookup").exists(), "collectiondb.lookup should exist"
    assert (src_pkg / "_internal").exists(), "collectiondb._internal should exist"


def test_version_attribute():
    import collectiondb

    assert collectiondb.__version__ in ("0.1.0", "dev")


def test_kernel_has_no_cli_or_lookup_imports():
    """The format kernel stays independent of the CLI and the lookup helpers."""
    here = Path(__file__).resolve().parent
    kernel_dir = here.parent / "src" / "collectiondb" / "kernel"
    for path in kernel_dir.glob("*.py"):
        text = path.read_text(encoding="utf-8")
        assert "collectiondb.cli" not in text, path.name
        assert "collectiondb.lookup" not in text, path.name
        assert "collectiondb.api" not in text, path.name


def test_every_package_directory_has_init():
    """Each source directory is a regular package, not an implicit namespace."""
    src_pkg = Path(__file__).resolve().parent.parent / "src" / "collectiondb"
    for directory in [src_pkg, *(p for p in src_pkg.rglob("*") if p.is_dir())]:
        if directory.name == "__pycache__":
            continue
        assert (directory / "__init__.py").exists(), directory
