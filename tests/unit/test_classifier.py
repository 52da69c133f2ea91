"""Unit tests for size classification."""

from pathlib import Path

import pytest

from cuinotes.core.classifier import classify
from cuinotes.core.errors import ClassificationError, ViewerError


def test_classify_above_threshold_is_large(tmp_path: Path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"x" * 100)

    result = classify(path, threshold=99)

    assert result.is_large is True
    assert result.size_bytes == 100
    assert result.path == path


def test_classify_at_threshold_is_not_large(tmp_path: Path):
    """Exactly at the threshold stays on the wholesale path (strictly greater is large)."""
    path = tmp_path / "a.txt"
    path.write_bytes(b"x" * 100)

    assert classify(path, threshold=100).is_large is False


def test_classify_ignores_line_count(tmp_path: Path):
    one_long_line = tmp_path / "long.txt"
    one_long_line.write_bytes(b"x" * 200)
    many_empty_lines = tmp_path / "many.txt"
    many_empty_lines.write_bytes(b"\n" * 200)

    assert classify(one_long_line, threshold=150).is_large is True
    assert classify(many_empty_lines, threshold=150).is_large is True
    assert classify(many_empty_lines, threshold=200).is_large is False


def test_classify_accepts_string_paths(tmp_path: Path):
    path = tmp_path / "a.txt"
    path.write_text("hello\n")

    assert classify(str(path), threshold=1).path == path


def test_classify_missing_file_raises(tmp_path: Path):
    missing = tmp_path / "missing.txt"

    with pytest.raises(ClassificationError) as exc_info:
        classify(missing, threshold=0)

    assert exc_info.value.path == missing
    assert isinstance(exc_info.value, ViewerError)
