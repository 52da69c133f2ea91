"""Extent counting: one sequential pass establishing a file's line count.

The same pass can record a sparse index of line-start byte offsets (every
`stride`-th line). With an index, cache reloads seek close to the requested
range instead of rescanning from byte 0.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from cuinotes.core.errors import ExtentCountError

logger = logging.getLogger(__name__)


def decode_line(raw: bytes, encoding: str) -> str:
    """Decode one raw line, dropping its terminator (`\\n` or `\\r\\n`)."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode(encoding, errors="replace")


@dataclass
class LineIndex:
    """Byte offsets of every `stride`-th line start (offsets[k] = start of line k*stride)."""

    stride: int
    offsets: list[int] = field(default_factory=list)

    def seek_point(self, line: int) -> tuple[int, int]:
        """Return (line number, byte offset) of the nearest indexed line at or before `line`."""
        if not self.offsets or line <= 0:
            return 0, 0
        slot = min(line // self.stride, len(self.offsets) - 1)
        return slot * self.stride, self.offsets[slot]


@dataclass(frozen=True)
class LineExtent:
    """Total line count of a file, plus the optional sparse offset index."""

    total_lines: int
    index: LineIndex | None = None


def count_lines(path: Path | str, index_stride: int = 0) -> LineExtent:
    """Count newline-delimited lines in a file with a single forward scan.

    A trailing line without a newline counts; an empty file has zero lines.

    Args:
        path: File to scan
        index_stride: Record every Nth line start offset when > 0

    Returns:
        The extent

    Raises:
        ExtentCountError: If the file cannot be opened or read
    """
    file_path = Path(path)
    index = LineIndex(stride=index_stride) if index_stride > 0 else None
    started = time.monotonic()

    line_count = 0
    offset = 0
    try:
        with open(file_path, "rb") as handle:
            for raw in handle:
                if index is not None and line_count % index_stride == 0:
                    index.offsets.append(offset)
                offset += len(raw)
                line_count += 1
    except OSError as exc:
        logger.warning("Failed to count lines in %s: %s", file_path, exc)
        raise ExtentCountError(f"Cannot scan {file_path}: {exc}", file_path) from exc

    logger.info(
        "Counted %d lines in %s (%.1f ms, %s index entries)",
        line_count,
        file_path,
        (time.monotonic() - started) * 1000,
        len(index.offsets) if index is not None else "no",
    )
    return LineExtent(total_lines=line_count, index=index)
