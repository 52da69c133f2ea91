"""cuinotes logging configuration.

Logs go to a file rather than the terminal so they never paint over the
Textual screen. The default location is `~/.cuinotes/cuinotes.log`; set
`CUINOTES_LOG_FILE` to move it and `CUINOTES_LOG_LEVEL` to change verbosity.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from cuinotes.constants import CONFIG_DIR, LOG_FILENAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_path() -> Path:
    """Return the configured log file path."""
    env_path = os.getenv("CUINOTES_LOG_FILE")
    if env_path:
        return Path(env_path).expanduser()
    return Path(CONFIG_DIR).expanduser() / LOG_FILENAME


def setup_logging(level: Optional[str] = None) -> Path:
    """Configure cuinotes logging.

    Args:
        level: Optional override for `CUINOTES_LOG_LEVEL`.

    Returns:
        The log file in use.
    """
    if level:
        os.environ["CUINOTES_LOG_LEVEL"] = level
    level_name = os.getenv("CUINOTES_LOG_LEVEL", "INFO").upper()

    log_path = resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("cuinotes")
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.propagate = False
    return log_path
