"""Runtime mode state and the per-invocation command context."""
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from mc.config.schema import McConfig
    from mc.console import McConsole
    from mc.registry import Registry


class EnvironmentDefaults(BaseSettings):
    """Environment-provided defaults for the global flags.

    ``MC_QUIET=1 mc ls`` behaves like ``mc --quiet ls``; explicit flags on
    the command line still win.
    """

    model_config = SettingsConfigDict(
        env_prefix="MC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    config_folder: str = ""
    quiet: bool = False
    mimic: bool = False
    json_mode: bool = Field(default=False, validation_alias="MC_JSON")
    debug: bool = False


@dataclass(frozen=True)
class RuntimeMode:
    """Process-wide output/diagnostic modes, fixed once during bootstrap."""

    quiet: bool = False
    debug: bool = False
    json: bool = False
    mimic: bool = False
    config_dir: Optional[Path] = None


@dataclass
class CommandContext:
    """Everything a command handler receives besides its own arguments.

    Stored on ``click.Context.obj`` once bootstrap reaches Ready.
    """

    registry: "Registry"
    mode: RuntimeMode
    config: "McConfig"
    console: "McConsole"

    @property
    def config_dir(self) -> Path:
        return self.mode.config_dir
