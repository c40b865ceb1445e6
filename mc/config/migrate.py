"""One-way, idempotent migration of config and session files.

Each migration reads the file's ``version`` and walks the upgrade chain to
the current version. Files already at the current version are left
untouched, so running a migration twice is a no-op the second time.
"""
import logging
from datetime import timezone
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Tuple

from pydantic import ValidationError

from mc.config.files import read_json, write_json_atomic
from mc.config.paths import config_file, session_dir
from mc.config.schema import CURRENT_CONFIG_VERSION, ConfigV1, ConfigV2, McConfig
from mc.errors import MigrationError, Result
from mc.session import CURRENT_SESSION_VERSION, Session, SessionHeader, SessionV1

logger = logging.getLogger(__name__)

Upgrade = Callable[[dict], dict]


# ---------- Config ----------


def _config_1_to_2(data: dict) -> dict:
    old = ConfigV1.model_validate(data)
    return {
        "version": "2",
        "aliases": dict(old.aliases),
        "hosts": {
            glob: {
                "accessKeyId": host.auth.access_key_id,
                "secretAccessKey": host.auth.secret_access_key,
            }
            for glob, host in old.hosts.items()
        },
    }


def _config_2_to_3(data: dict) -> dict:
    old = ConfigV2.model_validate(data)
    new = McConfig(
        aliases=dict(old.aliases),
        hosts={
            glob: {
                "accessKeyId": host.access_key_id,
                "secretAccessKey": host.secret_access_key,
                "api": "S3v4",
            }
            for glob, host in old.hosts.items()
        },
    )
    return new.to_file()


CONFIG_UPGRADES: Dict[str, Tuple[str, Upgrade]] = {
    "1.0.0": ("2", _config_1_to_2),
    "2": ("3", _config_2_to_3),
}


# ---------- Session ----------


def _legacy_target(source: str, target_url: str, into_folder: bool) -> str:
    if not into_folder:
        return target_url
    return target_url.rstrip("/") + "/" + PurePosixPath(source).name


def _session_1_to_2(data: dict) -> dict:
    old = SessionV1.model_validate(data)
    into_folder = len(old.source_urls) > 1 or old.target_url.endswith("/")
    args = list(old.source_urls)
    if old.target_url:
        args.append(old.target_url)
    new = Session(
        header=SessionHeader(
            when=old.started if old.started.tzinfo else old.started.replace(tzinfo=timezone.utc),
            command_type=old.command_type,
            command_args=args,
            last_copied=old.last_copied,
        ),
        pending=[f"{src}\t{_legacy_target(src, old.target_url, into_folder)}" for src in old.files],
    )
    return new.to_file()


SESSION_UPGRADES: Dict[str, Tuple[str, Upgrade]] = {
    "1": ("2", _session_1_to_2),
}


def _upgrade_file(path: Path, current: str, chain: Dict[str, Tuple[str, Upgrade]], kind: str) -> bool:
    """Upgrade one file in place. Returns True if it was rewritten."""
    try:
        data = read_json(path)
    except (OSError, ValueError) as e:
        raise MigrationError(f"Unable to read {kind} file ‘{path}’ for migration.", cause=e)
    if not isinstance(data, dict) or "version" not in data:
        raise MigrationError(f"{kind.capitalize()} file ‘{path}’ has no version field.")

    version = str(data["version"])
    if version == current:
        return False

    start = version
    while version != current:
        if version not in chain:
            raise MigrationError(f"Unsupported {kind} version ‘{version}’ in ‘{path}’.")
        next_version, upgrade = chain[version]
        try:
            data = upgrade(data)
        except ValidationError as e:
            raise MigrationError(f"Malformed {kind} file ‘{path}’ at version ‘{version}’.", cause=e)
        version = next_version

    try:
        write_json_atomic(path, data)
    except OSError as e:
        raise MigrationError(f"Unable to save migrated {kind} file ‘{path}’.", cause=e)
    logger.info("Migrated %s ‘%s’ from version %s to %s.", kind, path, start, current)
    return True


def migrate_config(config_dir: Path) -> Result[List[Path]]:
    """Bring ``config.json`` to the current schema if it exists."""
    path = config_file(config_dir)
    if not path.exists():
        return Result.success([])
    try:
        changed = _upgrade_file(path, CURRENT_CONFIG_VERSION, CONFIG_UPGRADES, "config")
    except MigrationError as e:
        return Result.failure(e)
    return Result.success([path] if changed else [])


def migrate_session(config_dir: Path) -> Result[List[Path]]:
    """Bring every saved session to the current schema.

    All files are attempted; the first failure is reported.
    """
    root = session_dir(config_dir)
    if not root.is_dir():
        return Result.success([])
    migrated: List[Path] = []
    first_error = None
    for path in sorted(root.glob("*.json")):
        try:
            if _upgrade_file(path, CURRENT_SESSION_VERSION, SESSION_UPGRADES, "session"):
                migrated.append(path)
        except MigrationError as e:
            logger.debug("Session migration failed for %s: %s", path, e)
            if first_error is None:
                first_error = e
    if first_error is not None:
        return Result.failure(first_error)
    return Result.success(migrated)
