"""Unit tests for WindowCache."""

from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest

from cuinotes.core.errors import CacheReloadError, FileNotOpenError
from cuinotes.core.extent import count_lines
from cuinotes.core.window_cache import WindowCache


def _expected(lo: int, hi: int) -> list[str]:
    return [f"line {i}" for i in range(lo, hi)]


@pytest.fixture
def hundred_lines(write_lines: Callable[..., Path]):
    path = write_lines(100)
    handle = open(path, "rb")
    yield path, handle
    handle.close()


def _cache(handle, total_lines: int = 100, cache_lines: int = 20, **kwargs) -> WindowCache:
    return WindowCache(handle, total_lines, cache_lines=cache_lines, **kwargs)


def test_new_cache_is_empty(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)

    assert cache.is_empty is True
    assert (cache.start_line, cache.end_line) == (-1, -1)
    assert cache.lines_between(0, 5) == []


def test_miss_loads_padded_window(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)

    cache.ensure_lines(30, 35)

    assert (cache.start_line, cache.end_line) == (20, 45)
    assert cache.reload_count == 1
    assert cache.lines_between(30, 35) == _expected(30, 35)


def test_request_inside_cached_window_does_not_reload(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)
    cache.ensure_lines(30, 35)

    cache.ensure_lines(31, 36)
    cache.ensure_lines(20, 25)
    cache.ensure_lines(40, 45)

    assert cache.reload_count == 1
    assert cache.lines_between(40, 45) == _expected(40, 45)


def test_request_past_cached_window_reloads_around_it(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)
    cache.ensure_lines(30, 35)

    cache.ensure_lines(41, 46)

    assert cache.reload_count == 2
    assert (cache.start_line, cache.end_line) == (31, 56)
    assert cache.lines_between(41, 46) == _expected(41, 46)


def test_padding_clamps_at_start_of_file(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)

    cache.ensure_lines(0, 4)

    assert (cache.start_line, cache.end_line) == (0, 14)


def test_request_past_end_of_file_returns_fewer_lines(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)

    cache.ensure_lines(95, 105)

    assert (cache.start_line, cache.end_line) == (85, 100)
    assert cache.lines_between(95, 105) == _expected(95, 100)


def test_last_line_without_newline_is_cached(write_lines: Callable[..., Path]):
    path = write_lines(5, trailing_newline=False)
    with open(path, "rb") as handle:
        cache = _cache(handle, total_lines=5)
        cache.ensure_lines(0, 5)

        assert cache.lines_between(0, 5) == _expected(0, 5)


def test_crlf_lines_are_decoded_without_carriage_return(tmp_path: Path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    with open(path, "rb") as handle:
        cache = _cache(handle, total_lines=2)
        cache.ensure_lines(0, 2)

        assert cache.lines_between(0, 2) == ["one", "two"]


def test_invalidate_forces_reload(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)
    cache.ensure_lines(0, 4)

    cache.invalidate()
    cache.ensure_lines(0, 4)

    assert cache.reload_count == 2


def test_reload_without_handle_raises(hundred_lines):
    cache = _cache(None)

    with pytest.raises(FileNotOpenError):
        cache.ensure_lines(0, 4)


def test_reload_with_closed_handle_raises(write_lines: Callable[..., Path]):
    path = write_lines(10)
    handle = open(path, "rb")
    handle.close()
    cache = _cache(handle, total_lines=10)

    with pytest.raises(FileNotOpenError):
        cache.ensure_lines(0, 4)


def test_hit_with_closed_handle_needs_no_io(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)
    cache.ensure_lines(30, 35)
    handle.close()

    cache.ensure_lines(32, 37)

    assert cache.lines_between(32, 37) == _expected(32, 37)


def test_read_error_keeps_previous_window(hundred_lines):
    _, handle = hundred_lines
    cache = _cache(handle)
    cache.ensure_lines(0, 4)

    broken = MagicMock()
    broken.closed = False
    broken.readline.side_effect = OSError("disk gone")
    cache.handle = broken

    with pytest.raises(CacheReloadError):
        cache.ensure_lines(80, 84)

    assert (cache.start_line, cache.end_line) == (0, 14)
    assert cache.lines_between(0, 4) == _expected(0, 4)
    assert cache.reload_count == 1


@pytest.mark.parametrize("window", [(0, 4), (17, 29), (50, 51), (93, 100), (99, 120)])
def test_indexed_reload_matches_linear_rescan(hundred_lines, window: tuple[int, int]):
    path, handle = hundred_lines
    extent = count_lines(path, index_stride=7)
    linear = _cache(handle)
    indexed = _cache(handle, index=extent.index)

    linear.ensure_lines(*window)
    indexed.ensure_lines(*window)

    assert (indexed.start_line, indexed.end_line) == (linear.start_line, linear.end_line)
    assert indexed.lines == linear.lines


def test_indexed_reload_seeks_near_requested_range(hundred_lines):
    path, handle = hundred_lines
    extent = count_lines(path, index_stride=10)
    cache = _cache(handle, index=extent.index)
    spy = MagicMock(wraps=handle)
    spy.closed = False
    cache.handle = spy

    cache.ensure_lines(60, 64)

    # Window starts at line 50, which is indexed: no lines before it are read
    spy.seek.assert_called_once_with(extent.index.offsets[5])
    assert spy.readline.call_count == 24
    assert cache.lines_between(60, 64) == _expected(60, 64)
