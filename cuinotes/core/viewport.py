"""Viewport controller: maps scroll intents onto a large-file session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cuinotes.constants import BORDER_ROWS, PAGE_OVERLAP

if TYPE_CHECKING:
    from cuinotes.core.session import FileViewSession


class ViewportController:
    """Moves `current_line` within bounds and produces viewport content.

    Every move returns the newline-joined content of the viewport after the
    move. `current_line` always stays in `[0, max(0, total_lines - viewport_height)]`.
    """

    def __init__(
        self,
        session: FileViewSession,
        *,
        page_overlap: int = PAGE_OVERLAP,
        border_rows: int = BORDER_ROWS,
    ) -> None:
        self.session = session
        self.page_overlap = page_overlap
        self.border_rows = border_rows

    @property
    def max_line(self) -> int:
        height = max(0, self.session.viewport_height)
        return max(0, self.session.total_lines - height)

    @property
    def page_step(self) -> int:
        # Consecutive pages share `page_overlap` lines
        return max(1, self.session.viewport_height - self.page_overlap)

    def position(self) -> tuple[int, int]:
        """Return (current_line, total_lines) for status display."""
        return self.session.current_line, self.session.total_lines

    def set_viewport_height(self, rows: int) -> None:
        """Apply the renderer's reported height, minus border rows.

        Non-positive heights are ignored (the renderer has not laid out yet).
        """
        if rows <= 0:
            return
        self.session.viewport_height = rows - self.border_rows
        self._move_to(self.session.current_line)

    def scroll_up(self) -> str:
        self._move_to(self.session.current_line - 1)
        return self.content()

    def scroll_down(self) -> str:
        self._move_to(self.session.current_line + 1)
        return self.content()

    def page_up(self) -> str:
        self._move_to(self.session.current_line - self.page_step)
        return self.content()

    def page_down(self) -> str:
        self._move_to(self.session.current_line + self.page_step)
        return self.content()

    def go_to_top(self) -> str:
        self._move_to(0)
        return self.content()

    def go_to_bottom(self) -> str:
        self._move_to(self.max_line)
        return self.content()

    def content(self) -> str:
        """Return the current viewport's lines joined with newlines.

        Fewer than `viewport_height` lines come back at end of file; the
        result is never padded with blank lines.

        Raises:
            FileNotOpenError: If the cache must reload and the file is closed
            CacheReloadError: If the reload fails
        """
        session = self.session
        height = session.viewport_height
        if height <= 0 or session.total_lines <= 0:
            return ""

        lo = session.current_line
        hi = min(lo + height, session.total_lines)
        session.cache.ensure_lines(lo, hi)
        return "\n".join(session.cache.lines_between(lo, hi))

    def _move_to(self, line: int) -> None:
        self.session.current_line = min(max(0, line), self.max_line)
