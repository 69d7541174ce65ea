"""Load configuration from .env file. Used for the config path instead of shell environment."""

import os
from pathlib import Path

from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parent


def _load_dotenv() -> None:
    """Load .env from project root; existing environment variables win."""
    load_dotenv(_PROJECT_ROOT / ".env")


def get_config_path() -> Path:
    """
    Return the YAML config path from CLINIC_CONFIG_PATH (.env or environment),
    resolved against the project root when relative. Defaults to config/default.yaml.
    """
    _load_dotenv()
    override = os.environ.get("CLINIC_CONFIG_PATH")
    if not override:
        return _PROJECT_ROOT / "config" / "default.yaml"
    path = Path(override).expanduser()
    if not path.is_absolute():
        path = (_PROJECT_ROOT / path).resolve()
    return path


def config_path_overridden() -> bool:
    _load_dotenv()
    return bool(os.environ.get("CLINIC_CONFIG_PATH"))
