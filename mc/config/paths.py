"""Config folder location."""
import os
import platform
from pathlib import Path
from typing import Optional

CONFIG_FILE = "config.json"
SESSION_DIR = "session"
UPDATE_CACHE_FILE = ".update_check"


def default_config_dir() -> Path:
    """``~/.mc`` on POSIX, ``%USERPROFILE%\\mc`` on Windows."""
    if platform.system() == "Windows":
        return Path.home() / "mc"
    return Path.home() / ".mc"


def resolve_config_dir(override: Optional[str] = None) -> Path:
    """Return the override as given, with only a leading `~` expanded, or the platform default."""
    if override:
        return Path(os.path.expanduser(override))
    return default_config_dir()


def config_file(config_dir: Path) -> Path:
    return config_dir / CONFIG_FILE


def session_dir(config_dir: Path) -> Path:
    return config_dir / SESSION_DIR


def update_cache_file(config_dir: Path) -> Path:
    return config_dir / UPDATE_CACHE_FILE
