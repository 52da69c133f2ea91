"""Notes directory listing for the sidebar.

Items are listed as: `..` (when below the root), folders, then files, each
group sorted by display title. Markdown and text notes are titled by their
first `# ` heading.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from cuinotes.constants import (
    FILE_ICON,
    FOLDER_ICON,
    LARGE_FILE_THRESHOLD,
    NOTE_EXTENSIONS,
    PARENT_ENTRY,
    WELCOME_NOTE,
    WELCOME_TITLE,
)

logger = logging.getLogger(__name__)

_TITLE_MARKUP = re.compile(r"[*_`~]+")

WELCOME_CONTENT = (
    f"# {WELCOME_TITLE}\n\n"
    "This is a console-based notes browser with **folder support** and **.md files**!\n\n"
    "### Features\n"
    "- **Folder organization** for your notes\n"
    "- **Large file support** with smooth scrolling\n"
    "- **Markdown rendering** in view mode\n\n"
    "### Text Formatting\n"
    "- **Regular bold** text\n"
    "- ***SUPER BOLD*** with special effects\n"
    "- __Underlined text__\n"
    "- ==Highlighted text==\n"
    "- ^^Large text effect^^\n"
    "- *Italic* and `code` formatting\n\n"
    "### Navigation\n"
    "- `Tab`: Switch panels\n"
    "- `Enter`: Open file/folder, or edit the open note\n"
    "- `Ctrl+S`: Save, `Esc`: Save and return to view mode\n"
    "- `PgUp/PgDn`, `Home/End`: Page and jump in the content pane\n"
    "- `r`/`F5`: Refresh\n\n"
    "*Try creating folders and organizing your notes!*"
)


@dataclass(frozen=True)
class NoteItem:
    """A sidebar entry (file, folder, or the parent link)."""

    name: str
    path: str  # relative to the notes directory
    is_folder: bool
    title: str

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_ENTRY


def extract_title(content: str) -> str:
    """Return the first `# ` heading, with markup characters removed.

    Only leading headings and blank lines are considered; the first line of
    body text ends the search.
    """
    for line in content.split("\n"):
        line = line.strip()
        if line.startswith("# "):
            return _TITLE_MARKUP.sub("", line[2:].strip())
        if line and not line.startswith("#"):
            break
    return ""


def note_title(path: Path, max_title_bytes: int = LARGE_FILE_THRESHOLD) -> str:
    """Sidebar title for a file: its heading for notes, otherwise its name."""
    if path.suffix not in NOTE_EXTENSIONS:
        return f"{FILE_ICON} {path.name}"

    title = ""
    try:
        # Large notes are not read just to find a heading
        if path.stat().st_size <= max_title_bytes:
            title = extract_title(path.read_text(encoding="utf-8", errors="replace"))
    except OSError as exc:
        logger.debug("Could not read title from %s: %s", path, exc)
    return f"{FILE_ICON} {title or path.stem}"


def _sort_key(item: NoteItem) -> tuple[int, str]:
    if item.is_parent:
        return (0, "")
    return (1 if item.is_folder else 2, item.title)


def create_welcome_note(notes_dir: Path) -> NoteItem | None:
    """Write the welcome note at the notes root unless one is already there."""
    welcome_path = notes_dir / WELCOME_NOTE
    if welcome_path.exists():
        return NoteItem(name=WELCOME_NOTE, path=WELCOME_NOTE, is_folder=False, title=note_title(welcome_path))
    try:
        welcome_path.write_text(WELCOME_CONTENT, encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to create welcome note in %s: %s", notes_dir, exc)
        return None
    return NoteItem(name=WELCOME_NOTE, path=WELCOME_NOTE, is_folder=False, title=f"{FILE_ICON} {WELCOME_TITLE}")


def list_items(
    notes_dir: Path,
    current_path: str = "",
    *,
    max_title_bytes: int = LARGE_FILE_THRESHOLD,
) -> list[NoteItem]:
    """List the entries of `notes_dir / current_path` for the sidebar.

    Args:
        notes_dir: Root of the notes tree
        current_path: Folder relative to the root ("" for the root)
        max_title_bytes: Files above this size are titled by name only

    Returns:
        Sorted items; an unreadable folder yields an empty list
    """
    current_dir = notes_dir / current_path if current_path else notes_dir
    try:
        entries = list(current_dir.iterdir())
    except OSError as exc:
        logger.warning("Failed to list %s: %s", current_dir, exc)
        return []

    items: list[NoteItem] = []
    if current_path:
        parent = str(Path(current_path).parent)
        items.append(
            NoteItem(
                name=PARENT_ENTRY,
                path="" if parent == "." else parent,
                is_folder=True,
                title=f"{FOLDER_ICON} {PARENT_ENTRY}",
            )
        )

    for entry in entries:
        relative = str(Path(current_path) / entry.name) if current_path else entry.name
        if entry.is_dir():
            items.append(NoteItem(name=entry.name, path=relative, is_folder=True, title=f"{FOLDER_ICON} {entry.name}"))
        else:
            items.append(
                NoteItem(name=entry.name, path=relative, is_folder=False, title=note_title(entry, max_title_bytes))
            )

    items.sort(key=_sort_key)

    # An empty folder (nothing but `..`) also offers the welcome note
    if all(item.is_parent for item in items):
        welcome = create_welcome_note(notes_dir)
        if welcome is not None:
            items.append(welcome)

    return items
