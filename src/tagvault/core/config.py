"""Configuration management for tagvault."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from tagvault.core.errors import SettingsError
from tagvault.core.types import TagSettings

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# Data directory (defaults to ~/.tagvault)
TAGVAULT_DATA_DIR = Path(
    get_env("TAGVAULT_DATA_DIR", os.path.expanduser("~/.tagvault"))
    or os.path.expanduser("~/.tagvault")
)

# Tag store database
DATABASE_PATH = Path(
    get_env("TAGVAULT_DB_PATH", str(TAGVAULT_DATA_DIR / "tags.db"))
    or TAGVAULT_DATA_DIR / "tags.db"
)

# Settings file looked up when no explicit path is given
SETTINGS_FILENAME = "tagvault.yaml"

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")

ENV_USE_THREE_DASH_CLOSING = "TAGVAULT_USE_THREE_DASH_CLOSING"
ENV_HIERARCHY_SEPARATOR = "TAGVAULT_HIERARCHY_SEPARATOR"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    level_name = (level or LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return logging.getLogger(__name__)


def _read_settings_file(path: Path) -> dict[str, Any]:
    logger.debug(f"Loading settings from {path}")
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        logger.error(f"Failed to read settings file {path}: {e}")
        raise SettingsError(f"Failed to read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {path}: {e}")
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.error(f"Settings must be a mapping, got {type(raw).__name__}")
        raise SettingsError(
            f"{path.name} must be a mapping, got {type(raw).__name__}"
        )
    return raw


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if os.getenv(ENV_USE_THREE_DASH_CLOSING) is not None:
        overrides["use_three_dash_closing"] = get_env_bool(
            ENV_USE_THREE_DASH_CLOSING, True
        )
    separator = get_env(ENV_HIERARCHY_SEPARATOR)
    if separator is not None:
        overrides["hierarchy_separator"] = separator
    return overrides


def load_settings(config_path: Path | str | None = None) -> TagSettings:
    """
    Build TagSettings from defaults, a YAML file and the environment.

    Environment variables win over the file, the file wins over defaults.
    When config_path is None, ``tagvault.yaml`` in the data directory is
    used if it exists.

    Raises:
        SettingsError: If the file is unreadable, not a mapping, or any
            value fails validation.
    """
    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise SettingsError(f"Settings file not found: {path}")
    else:
        path = TAGVAULT_DATA_DIR / SETTINGS_FILENAME

    data: dict[str, Any] = {}
    if path.exists():
        data.update(_read_settings_file(path))
    data.update(_env_overrides())

    try:
        settings = TagSettings.model_validate(data)
    except ValidationError as e:
        logger.error(f"Invalid tagvault settings: {e}")
        raise SettingsError(f"Invalid tagvault settings: {e}") from e

    logger.debug(
        "Settings loaded: use_three_dash_closing=%s, hierarchy_separator=%r",
        settings.use_three_dash_closing,
        settings.hierarchy_separator,
    )
    return settings
