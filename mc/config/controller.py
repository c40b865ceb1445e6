"""Config location, migration and validation for one config folder."""
import logging
import platform
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from mc.config import migrate
from mc.config.files import read_json, write_json_atomic
from mc.config.paths import config_file, session_dir
from mc.config.schema import McConfig, default_config
from mc.errors import ConfigError, McError, Result, RuntimeIncompatibleError

logger = logging.getLogger(__name__)

MIN_PYTHON: Tuple[int, int] = (3, 9)

SUPPORTED_SYSTEMS = frozenset({"linux", "darwin", "windows", "freebsd", "openbsd", "netbsd"})

_MACHINE_ALIASES = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "x86",
    "i686": "x86",
    "aarch64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
}
SUPPORTED_MACHINES = frozenset({"x86_64", "x86", "arm64", "arm", "ppc64le", "s390x"})


def verify_runtime_compatibility(
    system: Optional[str] = None,
    machine: Optional[str] = None,
    version_info: Optional[Tuple[int, ...]] = None,
) -> Optional[McError]:
    """Check OS, architecture and interpreter version. None means compatible."""
    system = (system if system is not None else platform.system()).lower()
    raw_machine = machine if machine is not None else platform.machine()
    normalized = _MACHINE_ALIASES.get(raw_machine.lower(), raw_machine.lower())
    version = tuple(version_info if version_info is not None else sys.version_info[:3])

    if system not in SUPPORTED_SYSTEMS:
        return RuntimeIncompatibleError(f"Unsupported operating system ‘{system}’.")
    if normalized not in SUPPORTED_MACHINES:
        return RuntimeIncompatibleError(f"Unsupported architecture ‘{raw_machine}’.")
    if version[:2] < MIN_PYTHON:
        found = ".".join(str(p) for p in version)
        wanted = ".".join(str(p) for p in MIN_PYTHON)
        return RuntimeIncompatibleError(f"Python {wanted} or newer is required, found {found}.")
    return None


def save_config(config_dir: Path, config: McConfig) -> Path:
    path = config_file(config_dir)
    write_json_atomic(path, config.to_file())
    return path


class ConfigController:
    """Owns the config folder for one process.

    Every method returns its outcome instead of raising, so bootstrap can
    decide how to fail.
    """

    def __init__(self, config_dir: Path):
        self.config_dir = config_dir

    @property
    def config_path(self) -> Path:
        return config_file(self.config_dir)

    def verify_runtime_compatibility(self) -> Optional[McError]:
        return verify_runtime_compatibility()

    def migrate_config(self) -> Result[List[Path]]:
        return migrate.migrate_config(self.config_dir)

    def migrate_session(self) -> Result[List[Path]]:
        return migrate.migrate_session(self.config_dir)

    def first_time_run(self) -> Result[bool]:
        """Write the default config and session folder when missing.

        Returns True when a new config file was created.
        """
        created = False
        try:
            if not self.config_path.exists():
                save_config(self.config_dir, default_config())
                logger.info("Configuration written to ‘%s’.", self.config_path)
                created = True
            session_dir(self.config_dir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Result.failure(ConfigError("Unable to initialize configuration folder.", cause=e))
        return Result.success(created)

    def load_and_validate_config(self) -> Result[McConfig]:
        path = self.config_path
        if not path.is_file():
            return Result.failure(ConfigError(f"Configuration file ‘{path}’ does not exist."))
        try:
            data = read_json(path)
        except (OSError, ValueError) as e:
            return Result.failure(ConfigError(f"Unable to read configuration file ‘{path}’.", cause=e))
        try:
            return Result.success(McConfig.model_validate(data))
        except ValidationError as e:
            return Result.failure(ConfigError(f"Invalid configuration file ‘{path}’.", cause=e))
