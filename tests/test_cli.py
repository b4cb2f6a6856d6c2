"""CLI tests for build, inspect and refs subcommands."""

import json
import sys
from pathlib import Path

import pytest

from collectiondb import cli
from collectiondb.api import read_database_file
from collectiondb.kernel.model import Collection
from collectiondb.kernel.writer import encode_database

from conftest import A_MD5, EMPTY_MD5


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["collectiondb"] + args)
    return cli.main()


def _write_cache(path: Path, lines) -> None:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def test_build_writes_database(monkeypatch, capsys, tmp_path):
    cache = tmp_path / "collection_hashes.txt"
    _write_cache(cache, [f"{EMPTY_MD5}|1", f"{A_MD5}|2"])
    out = tmp_path / "collection.db"
    _run_cli(["build", "--hashes", str(cache), "--name", "demo", "--out", str(out)], monkeypatch)

    stdout = capsys.readouterr().out
    assert "[OK] Collection saved" in stdout
    assert "Checksums: 2" in stdout
    db = read_database_file(out)
    assert db.version == 20220906
    assert db.collections == [Collection(name="demo", hashes=[EMPTY_MD5, A_MD5])]


def test_build_reports_rejected_entries(monkeypatch, capsys, tmp_path):
    cache = tmp_path / "collection_hashes.txt"
    _write_cache(cache, [f"{EMPTY_MD5}|1", "BADHASH|2"])
    out = tmp_path / "collection.db"
    _run_cli(
        ["build", "--hashes", str(cache), "--client-version", "20250101", "--out", str(out)],
        monkeypatch,
    )

    captured = capsys.readouterr()
    assert "Rejected 1 malformed checksum(s)" in captured.err
    assert "line 2" in captured.err
    assert "Rejected: 1" in captured.out
    db = read_database_file(out)
    assert db.version == 20250101
    assert db.collections[0].name is None
    assert db.collections[0].hashes == [EMPTY_MD5]


def test_build_with_no_valid_checksums_fails(monkeypatch, capsys, tmp_path):
    cache = tmp_path / "collection_hashes.txt"
    _write_cache(cache, ["nope|1"])
    out = tmp_path / "collection.db"
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["build", "--hashes", str(cache), "--out", str(out)], monkeypatch)
    assert excinfo.value.code == 1
    assert "No valid checksums" in capsys.readouterr().err
    assert not out.exists()


def test_build_missing_cache_fails(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(
            ["build", "--hashes", str(tmp_path / "missing.txt"), "--out", str(tmp_path / "c.db")],
            monkeypatch,
        )
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_build_rejects_out_of_range_client_version(monkeypatch, capsys, tmp_path):
    cache = tmp_path / "collection_hashes.txt"
    _write_cache(cache, [f"{EMPTY_MD5}|1"])
    out = tmp_path / "collection.db"
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(
            ["build", "--hashes", str(cache), "--client-version", "3000000000", "--out", str(out)],
            monkeypatch,
        )
    assert excinfo.value.code == 2
    assert "signed 32-bit" in capsys.readouterr().err
    assert not out.exists()


def test_build_rejects_non_integer_client_version(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["build", "--client-version", "soon", "--out", str(tmp_path / "c.db")], monkeypatch)
    assert excinfo.value.code == 2
    assert "invalid integer" in capsys.readouterr().err


def test_build_quiet(monkeypatch, capsys, tmp_path):
    cache = tmp_path / "collection_hashes.txt"
    _write_cache(cache, [A_MD5])
    _run_cli(
        ["build", "--quiet", "--hashes", str(cache), "--out", str(tmp_path / "c.db")],
        monkeypatch,
    )
    assert capsys.readouterr().out == ""


def test_inspect_summary(monkeypatch, capsys, tmp_path, mixed_database):
    path = tmp_path / "collection.db"
    path.write_bytes(encode_database(mixed_database))
    _run_cli(["inspect", str(path)], monkeypatch)
    out = capsys.readouterr().out
    assert "Version: 20240101" in out
    assert "Collections: 4" in out
    assert "Checksums: 6" in out
    assert "(unnamed): 1" in out
    assert "ranked ★ picks: 3 (1 absent)" in out


def test_inspect_json(monkeypatch, capsys, tmp_path, demo_database):
    path = tmp_path / "collection.db"
    path.write_bytes(encode_database(demo_database))
    _run_cli(["inspect", "--json", str(path)], monkeypatch)
    data = json.loads(capsys.readouterr().out)
    assert data == demo_database.model_dump()


def test_inspect_strict_rejects_trailing_bytes(monkeypatch, capsys, tmp_path, demo_database):
    path = tmp_path / "collection.db"
    path.write_bytes(encode_database(demo_database) + b"\xff")
    _run_cli(["inspect", str(path)], monkeypatch)
    capsys.readouterr()
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["inspect", "--strict", str(path)], monkeypatch)
    assert excinfo.value.code == 1
    assert "trailing byte" in capsys.readouterr().err


def test_inspect_corrupt_file_fails(monkeypatch, capsys, tmp_path):
    path = tmp_path / "collection.db"
    path.write_bytes(b"\x01\x00")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["inspect", str(path)], monkeypatch)
    assert excinfo.value.code == 1
    assert "Unexpected end of data" in capsys.readouterr().err


def test_refs_prints_ids(monkeypatch, capsys, tmp_path):
    links = tmp_path / "links.txt"
    links.write_text("# comment\n129891\nhttps://osu.ppy.sh/b/7\n", encoding="utf-8")
    _run_cli(["refs", str(links)], monkeypatch)
    out = capsys.readouterr().out
    assert out.split() == ["129891", "7"]


def test_refs_invalid_line_fails(monkeypatch, capsys, tmp_path):
    links = tmp_path / "links.txt"
    links.write_text("129891\nwhat is this\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["refs", str(links)], monkeypatch)
    assert excinfo.value.code == 1
    assert "Invalid reference: what is this" in capsys.readouterr().err


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
