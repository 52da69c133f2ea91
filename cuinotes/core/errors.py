"""Errors raised by the large-file viewing core.

None of these are fatal to the application: callers log them and show empty
(or unchanged) content for the affected item.
"""

from pathlib import Path


class ViewerError(Exception):
    """Base class for large-file viewing failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ClassificationError(ViewerError):
    """The file could not be stat'ed."""


class ExtentCountError(ViewerError):
    """The initial line-count scan failed."""


class SessionOpenError(ViewerError):
    """The file handle for a large-file session could not be opened."""


class FileNotOpenError(ViewerError):
    """A cache reload was requested while no file handle is open."""


class CacheReloadError(ViewerError):
    """Reading lines during a cache reload failed."""
