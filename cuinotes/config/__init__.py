"""Global configuration management.

Config is loaded at module import time and available globally via:
    from cuinotes.config import config
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from cuinotes.config.loader import load_config
from cuinotes.config.schema import ViewerConfig

# Project root (relative to this file)
_project_root = Path(__file__).parent.parent.parent

# Load .env (allow override for tests)
_env_path = os.getenv("CUINOTES_ENV_PATH")
_dotenv_path = Path(_env_path).expanduser() if _env_path else _project_root / ".env"
if not _dotenv_path.is_absolute():
    _dotenv_path = (_project_root / _dotenv_path).resolve()

load_dotenv(_dotenv_path)

_config_env = os.getenv("CUINOTES_CONFIG")
config: ViewerConfig = load_config(Path(_config_env).expanduser() if _config_env else None)

__all__ = ["ViewerConfig", "config", "load_config"]
