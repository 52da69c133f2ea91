"""Size classification: decides whether a file needs the windowed path."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from cuinotes.core.errors import ClassificationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileClassification:
    """Result of classifying a file by byte size."""

    path: Path
    size_bytes: int
    is_large: bool


def classify(path: Path | str, threshold: int) -> FileClassification:
    """Stat a file and decide whether it exceeds the large-file threshold.

    Line count plays no part: a file with few very long lines can still be large.

    Args:
        path: File to classify
        threshold: Byte size above which a file is large

    Returns:
        The classification

    Raises:
        ClassificationError: If the file cannot be stat'ed
    """
    file_path = Path(path)
    try:
        size_bytes = os.stat(file_path).st_size
    except OSError as exc:
        logger.warning("Failed to stat %s: %s", file_path, exc)
        raise ClassificationError(f"Cannot stat {file_path}: {exc}", file_path) from exc

    is_large = size_bytes > threshold
    logger.debug("Classified %s: %d bytes, large=%s (threshold %d)", file_path, size_bytes, is_large, threshold)
    return FileClassification(path=file_path, size_bytes=size_bytes, is_large=is_large)
