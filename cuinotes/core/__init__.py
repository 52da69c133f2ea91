"""Windowed line cache for viewing files too large to load wholesale."""

from cuinotes.core.classifier import FileClassification, classify
from cuinotes.core.errors import (
    CacheReloadError,
    ClassificationError,
    ExtentCountError,
    FileNotOpenError,
    SessionOpenError,
    ViewerError,
)
from cuinotes.core.extent import LineExtent, LineIndex, count_lines
from cuinotes.core.session import FileViewSession, SessionManager
from cuinotes.core.viewport import ViewportController
from cuinotes.core.window_cache import WindowCache

__all__ = [
    "CacheReloadError",
    "ClassificationError",
    "ExtentCountError",
    "FileClassification",
    "FileNotOpenError",
    "FileViewSession",
    "LineExtent",
    "LineIndex",
    "SessionManager",
    "SessionOpenError",
    "ViewerError",
    "ViewportController",
    "WindowCache",
    "classify",
    "count_lines",
]
