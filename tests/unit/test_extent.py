"""Unit tests for the extent counter and sparse line index."""

from pathlib import Path

import pytest

from cuinotes.core.errors import ExtentCountError
from cuinotes.core.extent import LineIndex, count_lines, decode_line


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"", 0),
        (b"a\nb\n", 2),
        (b"a\nb", 2),
        (b"\n\n", 2),
        (b"no newline", 1),
        (b"a\r\nb\r\n", 2),
    ],
)
def test_count_lines(tmp_path: Path, data: bytes, expected: int):
    path = tmp_path / "f.txt"
    path.write_bytes(data)

    extent = count_lines(path)

    assert extent.total_lines == expected
    assert extent.index is None


def test_count_lines_records_sparse_index(tmp_path: Path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"x\n" * 10)

    extent = count_lines(path, index_stride=3)

    assert extent.total_lines == 10
    assert extent.index is not None
    # Lines 0, 3, 6, 9 start at bytes 0, 6, 12, 18
    assert extent.index.offsets == [0, 6, 12, 18]


def test_count_lines_missing_file_raises(tmp_path: Path):
    with pytest.raises(ExtentCountError):
        count_lines(tmp_path / "missing.txt")


def test_seek_point_picks_nearest_indexed_line_at_or_before():
    index = LineIndex(stride=3, offsets=[0, 6, 12, 18])

    assert index.seek_point(0) == (0, 0)
    assert index.seek_point(2) == (0, 0)
    assert index.seek_point(3) == (3, 6)
    assert index.seek_point(7) == (6, 12)
    assert index.seek_point(100) == (9, 18)


def test_seek_point_on_empty_index():
    assert LineIndex(stride=5).seek_point(42) == (0, 0)


def test_decode_line_strips_terminators():
    assert decode_line(b"abc\n", "utf-8") == "abc"
    assert decode_line(b"abc\r\n", "utf-8") == "abc"
    assert decode_line(b"abc", "utf-8") == "abc"
    assert decode_line(b"\n", "utf-8") == ""


def test_decode_line_replaces_invalid_bytes():
    assert decode_line(b"ok \xff\n", "utf-8") == "ok �"
