"""Window cache: a contiguous, padded range of a file's lines held in memory.

A request outside the cached range rebuilds the whole window by scanning the
file forward. Without a line index every reload starts at byte 0, so reload
cost grows with the absolute position in the file rather than the window
size. Line boundaries are always re-derived from the bytes on disk.
"""

from __future__ import annotations

import logging
import time
from typing import BinaryIO

from cuinotes.constants import NO_LINE
from cuinotes.core.errors import CacheReloadError, FileNotOpenError
from cuinotes.core.extent import LineIndex, decode_line

logger = logging.getLogger(__name__)


class WindowCache:
    """Cached slice `[start_line, end_line)` of a file's lines."""

    def __init__(
        self,
        handle: BinaryIO | None,
        total_lines: int,
        *,
        cache_lines: int,
        index: LineIndex | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.handle = handle
        self.total_lines = total_lines
        self.padding = cache_lines // 2
        self.index = index
        self.encoding = encoding
        self.start_line = NO_LINE
        self.end_line = NO_LINE
        self.lines: list[str] = []
        self.reload_count = 0

    @property
    def is_empty(self) -> bool:
        return self.start_line == NO_LINE

    def invalidate(self) -> None:
        """Drop cached lines; the next request reloads."""
        self.start_line = NO_LINE
        self.end_line = NO_LINE
        self.lines = []

    def covers(self, lo: int, hi: int) -> bool:
        """Whether `[lo, hi)` lies inside the cached range."""
        return not self.is_empty and self.start_line <= lo and self.end_line >= hi

    def ensure_lines(self, lo: int, hi: int) -> None:
        """Make sure lines `[lo, hi)` (clamped to the file) are cached.

        A request already inside the cached range is answered without I/O. On
        a miss the window is rebuilt around the request, padded by half the
        cache width on each side so nearby scrolls hit.

        Raises:
            FileNotOpenError: If a reload is needed and the handle is closed
            CacheReloadError: If reading fails; the previous cache is kept
        """
        hi = min(hi, self.total_lines)
        lo = min(max(0, lo), hi)
        if self.covers(lo, hi):
            return

        cache_lo = max(0, lo - self.padding)
        cache_hi = min(self.total_lines, hi + self.padding)
        self._reload(cache_lo, cache_hi)

    def lines_between(self, lo: int, hi: int) -> list[str]:
        """Return cached lines for `[lo, hi)`, clamped to what is cached."""
        if self.is_empty:
            return []
        start = max(0, lo - self.start_line)
        end = min(len(self.lines), hi - self.start_line)
        if start >= end:
            return []
        return self.lines[start:end]

    def _reload(self, cache_lo: int, cache_hi: int) -> None:
        handle = self.handle
        if handle is None or handle.closed:
            raise FileNotOpenError("File not open")

        if self.index is not None:
            line_number, offset = self.index.seek_point(cache_lo)
        else:
            line_number, offset = 0, 0

        started = time.monotonic()
        fresh: list[str] = []
        try:
            handle.seek(offset)
            while line_number < cache_hi:
                raw = handle.readline()
                if not raw:
                    break
                if line_number >= cache_lo:
                    fresh.append(decode_line(raw, self.encoding))
                line_number += 1
        except (OSError, ValueError) as exc:
            logger.warning("Cache reload of lines [%d, %d) failed: %s", cache_lo, cache_hi, exc)
            raise CacheReloadError(f"Failed to reload lines [{cache_lo}, {cache_hi}): {exc}") from exc

        self.lines = fresh
        self.start_line = cache_lo
        self.end_line = cache_lo + len(fresh)
        self.reload_count += 1
        logger.debug(
            "Reloaded cache [%d, %d) from offset %d in %.1f ms",
            self.start_line,
            self.end_line,
            offset,
            (time.monotonic() - started) * 1000,
        )
