import logging
from pathlib import Path
from typing import Optional

import yaml

from cuinotes.config.schema import ViewerConfig
from cuinotes.constants import CONFIG_DIR, CONFIG_FILENAME
from cuinotes.utils import expand_env_vars

logger = logging.getLogger(__name__)


def _warn_unknown_keys(model: ViewerConfig, config_path: Path) -> None:
    """Warn about keys the schema does not define."""
    if model.model_extra:
        logger.warning("Unknown keys in %s: %s", config_path, list(model.model_extra.keys()))


def default_config_path() -> Path:
    return Path(CONFIG_DIR).expanduser() / CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> ViewerConfig:
    """Load and validate viewer configuration from a YAML file.

    Args:
        path: Path to cuinotes.yml. Defaults to ~/.cuinotes/cuinotes.yml.

    Returns:
        The validated configuration; defaults when the file is missing or unreadable.
    """
    if path is None:
        path = default_config_path()
    if not path.exists():
        return ViewerConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return ViewerConfig()

    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: expected a mapping, got %s", path, type(raw).__name__)
        return ViewerConfig()

    expanded = expand_env_vars(raw)
    model = ViewerConfig.model_validate(expanded)
    _warn_unknown_keys(model, path)
    return model
