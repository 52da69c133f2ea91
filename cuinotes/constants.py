"""Constants used across cuinotes.

Defaults here seed the configuration schema; runtime code reads the values
from `cuinotes.config.config` so deployments can override them.
"""

# Large file handling
LARGE_FILE_THRESHOLD = 1024 * 1024  # 1 MiB
CACHE_LINES = 1000  # Lines cached around the viewport (half on each side)
DEFAULT_VIEWPORT = 30  # Viewport height before the renderer reports its size
BORDER_ROWS = 2  # Rows taken by the content pane border
PAGE_OVERLAP = 2  # Lines shared between consecutive pages

# Empty cache range marker
NO_LINE = -1

# Notes browser
NOTES_DIR = "notes"
NOTE_EXTENSIONS = (".md", ".txt")
PARENT_ENTRY = ".."
FOLDER_ICON = "📁"
FILE_ICON = "📄"
WELCOME_NOTE = "Welcome.md"
WELCOME_TITLE = "Welcome to CUI Notes!"
# Below this width only one of sidebar and content is shown
SMALL_SCREEN_WIDTH = 80

# Filesystem locations
CONFIG_DIR = "~/.cuinotes"
CONFIG_FILENAME = "cuinotes.yml"
LOG_FILENAME = "cuinotes.log"
