"""Textual notes browser with windowed viewing for large files.

Left: the notes sidebar. Right: the content pane, which renders small files
wholesale and large files one viewport at a time through the session manager.
Small notes can be edited in place (Enter to edit, Ctrl+S to save, Esc to save
and return to view mode); large files stay read-only.

Usage: python -m cuinotes.cli.viewer [--config PATH] [--log-level LEVEL] [notes_dir]
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Label, ListItem, ListView, Static, TextArea

from cuinotes import __version__
from cuinotes.config.loader import load_config
from cuinotes.config.schema import ViewerConfig
from cuinotes.constants import SMALL_SCREEN_WIDTH
from cuinotes.core.session import SessionManager
from cuinotes.library import NoteItem, list_items, note_title
from cuinotes.logging_config import setup_logging
from cuinotes.markdown import render_markdown
from cuinotes.utils import format_size

logger = logging.getLogger(__name__)

LARGE_FILE_HINTS = " | ↑/↓: Scroll | PgUp/PgDn: Page | Home/End: Top/Bottom"
EDIT_HINTS = " | Ctrl+S: Save | Esc: View mode"


class NoteListItem(ListItem):
    """Sidebar row carrying its NoteItem."""

    def __init__(self, note: NoteItem) -> None:
        super().__init__(Label(note.title, markup=False))
        self.note = note

    def retitle(self, note: NoteItem) -> None:
        self.note = note
        self.query_one(Label).update(note.title)


class ContentPane(VerticalScroll, can_focus=True):
    """Content area; routes scroll keys to the session manager for large files."""

    BINDINGS = [
        Binding("up", "line_up", "Up", show=False),
        Binding("down", "line_down", "Down", show=False),
        Binding("pageup", "page_back", "PgUp"),
        Binding("pagedown", "page_forward", "PgDn"),
        Binding("home", "top", "Top"),
        Binding("end", "bottom", "Bottom"),
        Binding("enter", "edit", "Edit"),
    ]

    class ViewportChanged(Message):
        """The visible content or line position changed."""

    class EditRequested(Message):
        """The user asked to edit the shown note."""

    def __init__(self, manager: SessionManager, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.manager = manager

    def compose(self) -> ComposeResult:
        yield Static("", id="content-body", markup=False)

    def show(self, content: str) -> None:
        self.query_one("#content-body", Static).update(render_markdown(content))
        if self.manager.is_large_file:
            size = format_size(self.manager.size_bytes)
            self.border_title = f"View Mode - Large File {size} ({self.manager.status_text()})"
        elif self.manager.is_editable:
            self.border_title = "View Mode - Enter to edit"
        else:
            self.border_title = "View Mode"
        self.post_message(self.ViewportChanged())

    def sync_height(self) -> None:
        """Report the pane's height (border included) to the session manager."""
        self.manager.resize(self.outer_size.height)

    def on_resize(self, _event: events.Resize) -> None:
        if not self.manager.is_large_file:
            return
        self.sync_height()
        self.manager.refresh()
        self.show(self.manager.current_content)

    def _large_move(self, name: str) -> bool:
        if not self.manager.is_large_file:
            return False
        self.sync_height()
        getattr(self.manager, name)()
        self.show(self.manager.current_content)
        return True

    def action_line_up(self) -> None:
        if not self._large_move("scroll_up"):
            self.scroll_up()

    def action_line_down(self) -> None:
        if not self._large_move("scroll_down"):
            self.scroll_down()

    def action_page_back(self) -> None:
        if not self._large_move("page_up"):
            self.scroll_page_up()

    def action_page_forward(self) -> None:
        if not self._large_move("page_down"):
            self.scroll_page_down()

    def action_top(self) -> None:
        if not self._large_move("go_to_top"):
            self.scroll_home()

    def action_bottom(self) -> None:
        if not self._large_move("go_to_bottom"):
            self.scroll_end()

    def action_edit(self) -> None:
        self.post_message(self.EditRequested())


class ViewerApp(App[None]):
    """Notes browser: sidebar of notes and folders plus a content pane.

    The content pane doubles as an editor for small notes. On screens narrower
    than SMALL_SCREEN_WIDTH only one of sidebar and content is visible and Tab
    toggles between them.
    """

    TITLE = "CUI Notes"

    BINDINGS = [
        Binding("tab", "switch_panel", "Switch panel", priority=True),
        Binding("escape", "view_mode", "View mode", priority=True),
        Binding("ctrl+s", "save_note", "Save"),
        Binding("r", "refresh_items", "Refresh"),
        Binding("f5", "refresh_items", "Refresh", show=False),
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    CSS = """
    #header {
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
    }
    #body {
        height: 1fr;
    }
    #sidebar {
        width: 32;
        border: round $primary;
    }
    #main {
        width: 1fr;
    }
    #content {
        height: 1fr;
        border: round $secondary;
        padding: 0;
    }
    #editor {
        height: 1fr;
        border: round $accent;
        display: none;
    }
    #status {
        height: 1;
        width: 100%;
        background: $panel;
        padding: 0 1;
    }
    """

    def __init__(self, notes_dir: Path, config: ViewerConfig | None = None, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.config = config or ViewerConfig()
        self.notes_dir = Path(notes_dir)
        self.current_path = ""
        self.items: list[NoteItem] = []
        self.manager = SessionManager(self.config)
        self.edit_mode = False
        self.sidebar_visible = True
        self._open_path: str | None = None

    def compose(self) -> ComposeResult:
        yield Label(f" {self.TITLE} - {self.notes_dir}", id="header")
        with Horizontal(id="body"):
            yield ListView(id="sidebar")
            with Vertical(id="main"):
                yield ContentPane(self.manager, id="content")
                yield TextArea(soft_wrap=True, id="editor")
        yield Label("", id="status")

    async def on_mount(self) -> None:
        self.apply_layout()
        await self.reload_items()
        self.query_one("#sidebar", ListView).focus()

    def on_unmount(self) -> None:
        self.manager.close()

    def on_resize(self, _event: events.Resize) -> None:
        self.apply_layout()

    def apply_layout(self) -> None:
        """Show both panels on wide screens, one of them on narrow ones."""
        narrow = self.size.width < SMALL_SCREEN_WIDTH
        self.query_one("#sidebar", ListView).display = self.sidebar_visible or not narrow
        self.query_one("#main", Vertical).display = not (narrow and self.sidebar_visible)

    def main_widget(self) -> Widget:
        """The widget holding the note: the editor while editing, else the content pane."""
        if self.edit_mode:
            return self.query_one("#editor", TextArea)
        return self.query_one(ContentPane)

    async def reload_items(self) -> None:
        """Re-list the current folder and show its first entry."""
        self.items = list_items(
            self.notes_dir,
            self.current_path,
            max_title_bytes=self.config.large_file_threshold,
        )
        sidebar = self.query_one("#sidebar", ListView)
        await sidebar.clear()
        await sidebar.extend(NoteListItem(item) for item in self.items)
        self._open_path = None
        if self.items:
            sidebar.index = 0
            self.open_item(self.items[0])
        elif self.leave_edit_mode(focus_content=False):
            self.manager.select_folder()
            self.query_one(ContentPane).show("")

    def open_item(self, item: NoteItem) -> None:
        """Load the selected item into the content pane."""
        if item.path == self._open_path and not item.is_folder:
            return
        if not self.leave_edit_mode(focus_content=False):
            return
        pane = self.query_one(ContentPane)
        if item.is_folder:
            self._open_path = None
            content = self.manager.select_folder()
        else:
            self._open_path = item.path
            content = self.manager.select(self.notes_dir / item.path)
            if self.manager.is_large_file:
                pane.sync_height()
                self.manager.refresh()
                content = self.manager.current_content
        pane.scroll_home(animate=False)
        pane.show(content)

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        if isinstance(event.item, NoteListItem):
            self.open_item(event.item.note)

    async def on_list_view_selected(self, event: ListView.Selected) -> None:
        if not isinstance(event.item, NoteListItem):
            return
        note = event.item.note
        if note.is_folder:
            self.current_path = note.path
            await self.reload_items()
        else:
            self.show_main()

    def on_content_pane_viewport_changed(self, _message: ContentPane.ViewportChanged) -> None:
        self.update_status()

    def on_content_pane_edit_requested(self, _message: ContentPane.EditRequested) -> None:
        self.enter_edit_mode()

    def on_descendant_focus(self, _event: events.DescendantFocus) -> None:
        self.update_status()

    def enter_edit_mode(self) -> None:
        """Swap the rendered view for an editor holding the raw note text."""
        if self.edit_mode or not self.manager.is_editable:
            return
        editor = self.query_one("#editor", TextArea)
        editor.load_text(self.manager.current_content)
        editor.border_title = "Edit Mode - Esc to view, Ctrl+S to save"
        self.query_one(ContentPane).display = False
        editor.display = True
        self.edit_mode = True
        editor.focus()
        self.update_status()

    def leave_edit_mode(self, *, focus_content: bool = True) -> bool:
        """Save pending edits and return to view mode.

        Returns False (staying in edit mode) when the save fails.
        """
        if not self.edit_mode:
            return True
        if not self.save_pending():
            return False
        self.edit_mode = False
        self.query_one("#editor", TextArea).display = False
        pane = self.query_one(ContentPane)
        pane.display = True
        pane.show(self.manager.current_content)
        if focus_content:
            pane.focus()
        return True

    def save_pending(self) -> bool:
        """Save the editor text if it differs from the file's content."""
        editor = self.query_one("#editor", TextArea)
        if editor.text == self.manager.current_content:
            return True
        return self.save_note()

    def save_note(self) -> bool:
        editor = self.query_one("#editor", TextArea)
        if not self.manager.save(editor.text):
            self.notify(f"Could not save {self._open_path}", severity="error")
            return False
        self._retitle_open_item()
        self.update_status()
        return True

    def _retitle_open_item(self) -> None:
        """Refresh the sidebar title of the open note after a save."""
        if self._open_path is None:
            return
        title = note_title(self.notes_dir / self._open_path, self.config.large_file_threshold)
        for position, item in enumerate(self.items):
            if item.path == self._open_path and not item.is_folder:
                self.items[position] = replace(item, title=title)
        for row in self.query_one("#sidebar", ListView).query(NoteListItem):
            if row.note.path == self._open_path and not row.note.is_folder:
                row.retitle(replace(row.note, title=title))

    def show_main(self) -> None:
        """Focus the note, un-hiding it first on narrow screens."""
        if self.sidebar_visible and self.size.width < SMALL_SCREEN_WIDTH:
            self.sidebar_visible = False
            self.apply_layout()
        self.main_widget().focus()

    def update_status(self) -> None:
        panel = "MAIN" if isinstance(self.focused, (ContentPane, TextArea)) else "SIDEBAR"
        mode = "EDIT" if self.edit_mode else "VIEW"
        sidebar = self.query_one("#sidebar", ListView)
        item_title = "N/A"
        if sidebar.index is not None and 0 <= sidebar.index < len(self.items):
            item_title = self.items[sidebar.index].title

        status = Text(f" Mode: {mode} | Panel: {panel} | Item: {item_title} | Items: {len(self.items)}")
        if self.edit_mode:
            status.append(EDIT_HINTS, style="dim")
        elif self.manager.is_large_file:
            status.append(f" | {self.manager.status_text()}", style="bold")
            status.append(LARGE_FILE_HINTS, style="dim")
        self.query_one("#status", Label).update(status)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action in ("view_mode", "save_note"):
            return self.edit_mode
        return True

    def action_switch_panel(self) -> None:
        sidebar = self.query_one("#sidebar", ListView)
        if self.size.width < SMALL_SCREEN_WIDTH:
            self.sidebar_visible = not self.sidebar_visible
            self.apply_layout()
            if self.sidebar_visible:
                sidebar.focus()
            else:
                self.main_widget().focus()
            return

        main = self.main_widget()
        if self.focused is main:
            sidebar.focus()
        else:
            main.focus()

    def action_view_mode(self) -> None:
        self.leave_edit_mode()

    def action_save_note(self) -> None:
        self.save_note()

    async def action_refresh_items(self) -> None:
        await self.reload_items()

    async def action_quit(self) -> None:
        """Quit, saving pending edits first."""
        if self.edit_mode and not self.save_pending():
            return
        self.exit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Browse notes, including files too large to load at once.")
    parser.add_argument("notes_dir", nargs="?", help="Notes directory (default: notes_dir from config)")
    parser.add_argument("--config", type=Path, default=None, help="Path to cuinotes.yml")
    parser.add_argument("--log-level", default=None, help="Override CUINOTES_LOG_LEVEL")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args()

    log_path = setup_logging(args.log_level)
    if args.config is not None:
        config = load_config(args.config)
    else:
        from cuinotes.config import config

    notes_dir = Path(args.notes_dir or config.notes_dir).expanduser()
    notes_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Starting viewer on %s (logs: %s)", notes_dir, log_path)

    app = ViewerApp(notes_dir=notes_dir, config=config)
    app.run()


if __name__ == "__main__":
    main()
