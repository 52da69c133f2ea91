"""Large-file sessions and the single-selection session manager.

A `FileViewSession` owns everything tied to one large file: the read-only
handle, the line extent, the window cache and the cursor. `SessionManager`
keeps at most one session alive and routes small files to wholesale reads.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from cuinotes.config.schema import ViewerConfig
from cuinotes.core.classifier import FileClassification, classify
from cuinotes.core.errors import SessionOpenError, ViewerError
from cuinotes.core.extent import LineIndex, count_lines
from cuinotes.core.viewport import ViewportController
from cuinotes.core.window_cache import WindowCache

logger = logging.getLogger(__name__)


class FileViewSession:
    """Scroll and cache state for one large file.

    Use as a context manager (or call `close()`) so the handle is released
    even when the session is abandoned mid-operation.
    """

    def __init__(
        self,
        classification: FileClassification,
        total_lines: int,
        handle: BinaryIO | None,
        *,
        cache_lines: int,
        default_viewport: int,
        index: LineIndex | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.path = classification.path
        self.size_bytes = classification.size_bytes
        self.is_large = classification.is_large
        self.total_lines = total_lines
        self.default_viewport = default_viewport
        self.current_line = 0
        self.viewport_height = default_viewport
        self.file_handle = handle
        self.cache = WindowCache(handle, total_lines, cache_lines=cache_lines, index=index, encoding=encoding)

    @classmethod
    def open(cls, classification: FileClassification, config: ViewerConfig) -> FileViewSession:
        """Count lines and open the handle for a file classified as large.

        Raises:
            ExtentCountError: If the initial line count fails
            SessionOpenError: If the file cannot be opened for reading
        """
        extent = count_lines(classification.path, index_stride=config.index_stride)
        try:
            handle = open(classification.path, "rb")
        except OSError as exc:
            raise SessionOpenError(f"Cannot open {classification.path}: {exc}", classification.path) from exc

        session = cls(
            classification,
            extent.total_lines,
            handle,
            cache_lines=config.cache_lines,
            default_viewport=config.default_viewport,
            index=extent.index,
            encoding=config.encoding,
        )
        logger.info(
            "Opened large file session for %s (%d bytes, %d lines)",
            session.path,
            session.size_bytes,
            session.total_lines,
        )
        return session

    @property
    def is_open(self) -> bool:
        return self.file_handle is not None and not self.file_handle.closed

    @property
    def cache_range(self) -> tuple[int, int]:
        return self.cache.start_line, self.cache.end_line

    def reset(self) -> None:
        """Start over at the top with an empty cache."""
        self.current_line = 0
        self.viewport_height = self.default_viewport
        self.cache.invalidate()

    def close(self) -> None:
        if self.file_handle is not None:
            self.file_handle.close()
            logger.debug("Closed large file session for %s", self.path)
        self.file_handle = None
        self.cache.handle = None
        self.cache.invalidate()

    def __enter__(self) -> FileViewSession:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()


class SessionManager:
    """Holds the single active selection and its content.

    Errors from the viewing core never escape: a failed selection shows empty
    content, and a failed scroll leaves the previous content in place.
    """

    def __init__(self, config: ViewerConfig) -> None:
        self.config = config
        self.session: Optional[FileViewSession] = None
        self.controller: Optional[ViewportController] = None
        self.current_path: Optional[Path] = None
        self.current_content = ""
        self.size_bytes = 0
        self.is_editable = False

    @property
    def is_large_file(self) -> bool:
        return self.session is not None

    def select(self, path: Path | str) -> str:
        """Switch the selection to a file and return its initial content."""
        file_path = Path(path)
        self.close()
        self.current_path = file_path
        self.current_content = ""
        self.size_bytes = 0
        self.is_editable = False

        try:
            classification = classify(file_path, self.config.large_file_threshold)
        except ViewerError as exc:
            logger.warning("Not showing %s: %s", file_path, exc)
            return self.current_content

        self.size_bytes = classification.size_bytes
        if not classification.is_large:
            content = self._read_small(file_path)
            if content is not None:
                self.current_content = content
                self.is_editable = True
            return self.current_content

        try:
            session = FileViewSession.open(classification, self.config)
        except ViewerError as exc:
            logger.warning("Not showing large file %s: %s", file_path, exc)
            return self.current_content

        session.reset()
        self.session = session
        self.controller = ViewportController(
            session,
            page_overlap=self.config.page_overlap,
            border_rows=self.config.border_rows,
        )
        self._apply(self.controller.content)
        return self.current_content

    def select_folder(self) -> str:
        """Selecting a folder ends any session and clears the content."""
        self.close()
        self.current_path = None
        self.current_content = ""
        self.size_bytes = 0
        self.is_editable = False
        return self.current_content

    def save(self, content: str) -> bool:
        """Write edited content back to the selected small file.

        Large files and failed selections are read-only. Returns whether the
        file was written; write errors are logged and leave the file's
        previous content as the current content.
        """
        if not self.is_editable or self.current_path is None:
            logger.warning("Refusing to save read-only selection %s", self.current_path)
            return False
        try:
            self.current_path.write_text(content, encoding=self.config.encoding)
        except OSError as exc:
            logger.warning("Failed to save %s: %s", self.current_path, exc)
            return False
        self.current_content = content
        self.size_bytes = len(content.encode(self.config.encoding, errors="replace"))
        logger.info("Saved %s (%d bytes)", self.current_path, self.size_bytes)
        return True

    def resize(self, rows: int) -> None:
        """Forward the renderer's available rows to the active session."""
        if self.controller is not None:
            self.controller.set_viewport_height(rows)

    def refresh(self) -> bool:
        """Re-read the viewport for the current size (e.g. after a resize)."""
        return self._run(lambda c: c.content)

    def scroll_up(self) -> bool:
        return self._run(lambda c: c.scroll_up)

    def scroll_down(self) -> bool:
        return self._run(lambda c: c.scroll_down)

    def page_up(self) -> bool:
        return self._run(lambda c: c.page_up)

    def page_down(self) -> bool:
        return self._run(lambda c: c.page_down)

    def go_to_top(self) -> bool:
        return self._run(lambda c: c.go_to_top)

    def go_to_bottom(self) -> bool:
        return self._run(lambda c: c.go_to_bottom)

    def position(self) -> tuple[int, int] | None:
        if self.controller is None:
            return None
        return self.controller.position()

    def status_text(self) -> str:
        """Line position for large files, empty otherwise."""
        position = self.position()
        if position is None:
            return ""
        current_line, total_lines = position
        return f"Line: {current_line + 1}/{total_lines}"

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
        self.session = None
        self.controller = None

    def _run(self, pick: Callable[[ViewportController], Callable[[], str]]) -> bool:
        """Run a controller operation; returns whether the content changed."""
        if self.controller is None:
            return False
        return self._apply(pick(self.controller))

    def _apply(self, operation: Callable[[], str]) -> bool:
        before = self.current_content
        line_before = self.session.current_line if self.session is not None else 0
        try:
            content = operation()
        except ViewerError as exc:
            logger.warning("Keeping previous content for %s: %s", self.current_path, exc)
            # Position must keep matching the content still on screen
            if self.session is not None:
                self.session.current_line = line_before
            return False
        self.current_content = content
        return content != before

    def _read_small(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding=self.config.encoding, errors="replace")
        except OSError as exc:
            logger.warning("Failed to read %s: %s", path, exc)
            return None


