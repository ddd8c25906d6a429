"""
Configuration for the item catalog.

Settings come from defaults, then an optional YAML file, then environment
variables (a .env file in the working directory is loaded first).
"""

import logging
import logging.config
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Paths
CONFIG_FILE = Path("catalog.yaml")
DATA_DIR = Path("data")
IMAGES_DIR = Path("images")

# Environment variable -> settings field
ENV_VARS = {
    "CATALOG_BACKEND": "backend",
    "CATALOG_DATA_DIR": "data_dir",
    "CATALOG_JSON_PATH": "json_path",
    "CATALOG_DB_PATH": "db_path",
    "CATALOG_IMAGES_DIR": "images_dir",
    "CATALOG_BUSY_TIMEOUT": "busy_timeout",
    "CATALOG_LOG_LEVEL": "log_level",
}

PATH_FIELDS = ("data_dir", "json_path", "db_path", "images_dir")


@dataclass(frozen=True)
class CatalogSettings:
    """
    Resolved catalog settings.

    json_path and db_path default to files under data_dir.
    """
    backend: str = "json"
    data_dir: Path = DATA_DIR
    json_path: Optional[Path] = None
    db_path: Optional[Path] = None
    images_dir: Path = IMAGES_DIR
    busy_timeout: float = 5.0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.json_path is None:
            object.__setattr__(self, "json_path", self.data_dir / "items.json")
        if self.db_path is None:
            object.__setattr__(self, "db_path", self.data_dir / "mercari.sqlite3")

    def images_path(self, image_name: str) -> Path:
        """Where an image with this name lives. The name is not sanitized."""
        return self.images_dir / image_name


def _coerce(name: str, value):
    if name in PATH_FIELDS:
        return Path(value)
    if name == "busy_timeout":
        return float(value)
    return str(value)


def load_yaml_config(path: Path) -> dict:
    """Load settings overrides from YAML. Missing file means no overrides."""
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def load_settings(config_file: Optional[Path] = None, environ=None) -> CatalogSettings:
    """Resolve settings from defaults, YAML, and the environment."""
    environ = os.environ if environ is None else environ
    config_file = config_file or Path(environ.get("CATALOG_CONFIG_FILE", CONFIG_FILE))

    values = {}
    known = set(ENV_VARS.values())
    for key, value in load_yaml_config(config_file).items():
        if key in known and value is not None:
            values[key] = _coerce(key, value)

    for env_key, name in ENV_VARS.items():
        if environ.get(env_key):
            values[name] = _coerce(name, environ[env_key])

    return CatalogSettings(**values)


def setup_logging(level="INFO") -> None:
    """Console logging for the catalog packages."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
            },
        },
        "loggers": {
            "repositories": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    })
