"""Configuration for reading_list.

Settings come from an optional JSON config file, overridden by environment
variables:

    READING_LIST_CONFIG     path of the config file
    READING_LIST_DATA_DIR   directory holding the data files
    READING_LIST_LOG_LEVEL  log level of the log file
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("config.json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_data_dir() -> Path:
    return Path.home() / ".reading_list"


@dataclass
class AppConfig:
    """Application settings.

    Attributes:
        name: Application name shown in the prompt and logs
        log_level: Level of the log file
        log_file: Log file path; relative paths live in ``data_dir``
        data_dir: Directory holding the entry books and user prefs
        user_prefs_file: User prefs path; relative paths live in ``data_dir``
    """

    name: str = "reading_list"
    log_level: str = "INFO"
    log_file: Optional[Path] = Path("reading_list.log")
    data_dir: Path = field(default_factory=_default_data_dir)
    user_prefs_file: Path = Path("preferences.json")

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.data_dir = Path(self.data_dir).expanduser()
        self.user_prefs_file = Path(self.user_prefs_file)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @property
    def user_prefs_path(self) -> Path:
        return self.data_dir / self.user_prefs_file

    @property
    def log_path(self) -> Optional[Path]:
        return self.data_dir / self.log_file if self.log_file is not None else None


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration from file and environment.

    A missing config file gives the defaults. A malformed one is logged and
    ignored.
    """
    if config_path is None:
        env_path = os.environ.get("READING_LIST_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_FILE

    values = {}
    config_path = Path(config_path)
    if config_path.exists():
        logger.info(f"Using config file: {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                values = json.load(f)
            if not isinstance(values, dict):
                raise ValueError("config file must hold a JSON object")
        except (OSError, ValueError) as e:
            logger.warning(f"Config file at {config_path} is not in the correct format ({e}). Using default config properties")
            values = {}

    if os.environ.get("READING_LIST_DATA_DIR"):
        values["data_dir"] = os.environ["READING_LIST_DATA_DIR"]
    if os.environ.get("READING_LIST_LOG_LEVEL"):
        values["log_level"] = os.environ["READING_LIST_LOG_LEVEL"]

    known = {name for name in AppConfig.__dataclass_fields__}
    unknown = set(values) - known
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")

    try:
        return AppConfig(**{key: value for key, value in values.items() if key in known})
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid config values ({e}). Using default config properties")
        return AppConfig()
