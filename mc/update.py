"""Release checker for mc."""

import importlib.metadata
import json
import logging
import shutil
import subprocess
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from packaging.version import InvalidVersion, Version

from mc.errors import ReportedError

logger = logging.getLogger(__name__)

PACKAGE_NAME = "mc-cli"
INDEX_URL = f"https://pypi.org/pypi/{PACKAGE_NAME}/json"
CACHE_TTL = 86400  # 24 hours


@dataclass(frozen=True)
class UpdateInfo:
    current: str
    latest: str
    install_method: str
    upgrade_cmd: str

    @property
    def available(self) -> bool:
        return Version(self.latest) > Version(self.current)


def _read_cache(cache_path: Path) -> Optional[str]:
    """Return the cached latest version if the cache is still fresh."""
    try:
        data = json.loads(cache_path.read_text())
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        if time.time() - data.get("checked_at", 0) >= CACHE_TTL:
            return None
    except TypeError:
        return None
    latest = data.get("latest_version")
    return latest if isinstance(latest, str) else None


def _write_cache(cache_path: Path, latest: str) -> None:
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(json.dumps({"checked_at": time.time(), "latest_version": latest}))
    except OSError as e:
        logger.debug("Unable to write update cache %s: %s", cache_path, e)


def _query_index(timeout: float = 5) -> str:
    req = urllib.request.Request(INDEX_URL, headers={"Accept": "application/json"})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        data = json.loads(resp.read())
    latest = data.get("info", {}).get("version")
    if not latest:
        raise ValueError("package index response has no version")
    return latest


def detect_install_method() -> str:
    """pipx, pip or unknown."""
    if shutil.which("pipx"):
        try:
            result = subprocess.run(
                ["pipx", "list", "--short"],
                capture_output=True, text=True, timeout=5,
            )
            if PACKAGE_NAME in result.stdout:
                return "pipx"
        except (OSError, subprocess.SubprocessError):
            pass
    try:
        importlib.metadata.distribution(PACKAGE_NAME)
        return "pip"
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def upgrade_command(method: str) -> str:
    if method == "pipx":
        return f"pipx upgrade {PACKAGE_NAME}"
    return f"pip install --upgrade {PACKAGE_NAME}"


def check_for_updates(current_version: str, cache_path: Path, use_cache: bool = True) -> UpdateInfo:
    """Compare the running version with the newest release on the index.

    Raises ReportedError when the index cannot be reached or answers with
    something that isn't a version.
    """
    latest = _read_cache(cache_path) if use_cache else None
    if latest is None:
        try:
            latest = _query_index()
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise ReportedError("Unable to check for updates.", cause=e)
        _write_cache(cache_path, latest)

    try:
        Version(latest)
        Version(current_version)
    except InvalidVersion as e:
        raise ReportedError("Unable to compare versions.", cause=e)

    method = detect_install_method()
    return UpdateInfo(
        current=current_version,
        latest=latest,
        install_method=method,
        upgrade_cmd=upgrade_command(method),
    )
