"""Tests for reading source files off disk."""

import pytest

from fileio import read_input_file
from ledger import FileReadError


def test_reads_utf8_text(tmp_path):
    f = tmp_path / "talk.txt"
    f.write_text("Transcript ☕", encoding="utf-8")
    path, content = read_input_file(str(f))
    assert path == f.resolve()
    assert content == "Transcript ☕"


def test_relative_path_resolved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    path, _ = read_input_file("a.txt")
    assert path.is_absolute()
    assert path.name == "a.txt"


@pytest.mark.parametrize(
    "setup, cause",
    [
        (lambda d: d / "missing.txt", "File not found"),
        (lambda d: d, "Path is a directory, not a file"),
        (lambda d: _write(d / "empty.txt", b""), "File is empty"),
        (lambda d: _write(d / "bin.dat", b"\xff\xfe\x00bad"), "File is not valid UTF-8 text"),
    ],
)
def test_read_failures(tmp_path, setup, cause):
    target = setup(tmp_path)
    with pytest.raises(FileReadError, match=cause) as exc:
        read_input_file(str(target))
    assert exc.value.code == "FILE_READ_ERROR"


def _write(path, data: bytes):
    path.write_bytes(data)
    return path
