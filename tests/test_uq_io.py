import io
import os
import sys
import time
from pathlib import Path

import pytest
from packages.uq import (
    InputFileError, InputTooLarge, OccurrenceIndex, UqOptions,
    check_input_file, index_sources, iter_records, read_sources,
)
from packages.uq.io import CHUNK_SIZE


@pytest.mark.parametrize("data,expected", [
    (b"", []),
    (b"a\nb\n", [b"a", b"b"]),
    (b"a\nb", [b"a", b"b"]),
    (b"\n\n", [b"", b""]),
    (b"a\n\nb\n", [b"a", b"", b"b"]),
])
def test_iter_records_newline(data, expected):
    assert list(iter_records(io.BytesIO(data))) == expected


def test_iter_records_nul_keeps_newlines():
    data = b"one\ntwo\0three\0"
    assert list(iter_records(io.BytesIO(data), b"\0")) == [b"one\ntwo", b"three"]


def test_iter_records_across_chunks(monkeypatch):
    import packages.uq.io as uq_io
    monkeypatch.setattr(uq_io, "CHUNK_SIZE", 3)
    data = b"alpha\nbe\ngamma-delta\n"
    assert list(iter_records(io.BytesIO(data))) == [b"alpha", b"be", b"gamma-delta"]


def test_read_sources_concatenates_in_order(tmp_path: Path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_bytes(b"1\n2")  # no trailing newline: last record ends at EOF
    b.write_bytes(b"3\n")
    stdin = io.BytesIO(b"s\n")
    out = list(read_sources([str(a), "-", str(b)], stdin=stdin))
    assert out == [b"1", b"2", b"s", b"3"]


def test_read_sources_defaults_to_stdin():
    assert list(read_sources([], stdin=io.BytesIO(b"x\ny\n"))) == [b"x", b"y"]


def test_check_input_file_accepts_regular_file_and_stdin(tmp_path: Path):
    p = tmp_path / "ok.txt"
    p.write_text("x\n", encoding="utf-8")
    check_input_file(str(p))
    check_input_file("-")


def test_check_input_file_missing(tmp_path: Path):
    with pytest.raises(InputFileError) as ei:
        check_input_file(str(tmp_path / "nope.txt"))
    assert ei.value.reason == "no such file"
    assert "nope.txt" in str(ei.value)


def test_check_input_file_directory(tmp_path: Path):
    with pytest.raises(InputFileError) as ei:
        check_input_file(str(tmp_path))
    assert ei.value.reason == "is a directory"


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs mkfifo")
def test_check_input_file_not_regular(tmp_path: Path):
    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)
    with pytest.raises(InputFileError) as ei:
        check_input_file(str(fifo))
    assert ei.value.reason == "not a regular file"


@pytest.mark.skipif(sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
                    reason="root can read anything")
def test_check_input_file_unreadable(tmp_path: Path):
    p = tmp_path / "secret.txt"
    p.write_text("x\n", encoding="utf-8")
    p.chmod(0)
    try:
        with pytest.raises(InputFileError) as ei:
            check_input_file(str(p))
        assert ei.value.reason == "permission denied"
    finally:
        p.chmod(0o644)


class _EndlessStream:
    """Serves `size` bytes of b"x" (no delimiter) and counts what was read."""

    def __init__(self, size: int):
        self.remaining = size
        self.served = 0

    def read(self, n: int = -1) -> bytes:
        n = self.remaining if n < 0 else min(n, self.remaining)
        self.remaining -= n
        self.served += n
        return b"x" * n


def test_ceiling_stops_reading_inside_a_long_record():
    stream = _EndlessStream(50 * 1024 * 1024)
    with pytest.raises(InputTooLarge):
        index_sources(["-"], UqOptions(max_input="1k"), stdin=stream)
    assert stream.served <= CHUNK_SIZE


def test_ceiling_stops_reading_after_earlier_records():
    tail = _EndlessStream(50 * 1024 * 1024)
    index = OccurrenceIndex(max_bytes=1024)
    index.add(b"a" * 600)
    with pytest.raises(InputTooLarge):
        index.extend(iter_records(tail, b"\n", index))
    assert tail.served <= CHUNK_SIZE
    assert index.original == [b"a" * 600]


def test_long_record_is_split_in_linear_time():
    size = 32 * 1024 * 1024
    data = b"y" * size + b"\nz\n"
    t0 = time.perf_counter()
    index = index_sources(["-"], UqOptions(), stdin=io.BytesIO(data))
    elapsed = time.perf_counter() - t0
    assert [len(r) for r in index.original] == [size, 1]
    assert elapsed < 5


@pytest.mark.parametrize("data,expected", [
    (b"ab\n\ncd\nef", [b"ab", b"", b"cd", b"ef"]),  # delimiter lands on a chunk edge
    (b"abc\n\n\n", [b"abc", b"", b""]),
    (b"abcdefgh", [b"abcdefgh"]),
])
def test_iter_records_small_chunks(monkeypatch, data, expected):
    import packages.uq.io as uq_io
    monkeypatch.setattr(uq_io, "CHUNK_SIZE", 3)
    assert list(iter_records(io.BytesIO(data))) == expected
