"""Startup pipeline run once before any subcommand.

Stages run strictly in order and stop at the first failure:

    Init -> RuntimeCheck -> Migrate -> EnvironmentCheck -> ConfigValidate -> Ready

Runtime sanity is established before anything touches the config folder,
and migration finishes before the config is validated, because a legacy
file would otherwise fail validation.
"""
import enum
import getpass
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from mc.config.controller import ConfigController
from mc.config.paths import resolve_config_dir
from mc.config.schema import McConfig
from mc.console import configure_logging
from mc.errors import ConfigError, EnvironmentCheckError, FatalError, McError
from mc.registry import Registry
from mc.state import RuntimeMode

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    INIT = "init"
    RUNTIME_CHECK = "runtime-check"
    MIGRATE = "migrate"
    ENVIRONMENT_CHECK = "environment-check"
    CONFIG_VALIDATE = "config-validate"
    READY = "ready"
    FATAL = "fatal"


@dataclass
class BootstrapResult:
    stage: Stage
    mode: Optional[RuntimeMode] = None
    config: Optional[McConfig] = None
    error: Optional[McError] = None
    failed_stage: Optional[Stage] = None

    @property
    def ok(self) -> bool:
        return self.stage is Stage.READY


def current_user() -> str:
    return getpass.getuser()


def runtime_mode_from_flags(registry: Registry, params: Mapping[str, Any]) -> RuntimeMode:
    """Apply parsed global flags to a fresh RuntimeMode.

    Each flag descriptor with an ``effect`` sets that RuntimeMode field;
    ``config_dir`` goes through config folder resolution.
    """
    fields: Dict[str, Any] = {}
    for flag in registry.flags:
        if flag.effect is None:
            continue
        fields[flag.effect] = params.get(flag.param_name, flag.default)
    override = fields.pop("config_dir", None) or None
    try:
        config_dir = resolve_config_dir(override)
    except (RuntimeError, KeyError, OSError) as e:
        raise FatalError("Unable to determine the configuration folder.", cause=e)
    return RuntimeMode(config_dir=config_dir, **{k: bool(v) for k, v in fields.items()})


class Bootstrapper:
    """Runs the startup stages against one config folder."""

    def __init__(
        self,
        registry: Registry,
        controller_factory: Callable[[Path], ConfigController] = ConfigController,
        user_lookup: Callable[[], str] = current_user,
    ):
        self.registry = registry
        self.controller_factory = controller_factory
        self.user_lookup = user_lookup

    def _fail(self, stage: Stage, error: McError, result: BootstrapResult) -> BootstrapResult:
        logger.debug("Bootstrap failed in %s: %s", stage.value, error)
        result.stage = Stage.FATAL
        result.failed_stage = stage
        result.error = error
        return result

    def _enter(self, result: BootstrapResult, stage: Stage) -> None:
        logger.debug("Bootstrap stage: %s", stage.value)
        result.stage = stage

    def run(self, params: Mapping[str, Any]) -> BootstrapResult:
        result = BootstrapResult(stage=Stage.INIT)

        # Init
        try:
            mode = runtime_mode_from_flags(self.registry, params)
        except FatalError as e:
            return self._fail(Stage.INIT, e, result)
        result.mode = mode
        configure_logging(mode)
        controller = self.controller_factory(mode.config_dir)
        logger.debug("Using configuration folder %s", mode.config_dir)

        # RuntimeCheck
        self._enter(result, Stage.RUNTIME_CHECK)
        error = controller.verify_runtime_compatibility()
        if error is not None:
            return self._fail(Stage.RUNTIME_CHECK, error, result)

        # Migrate: config before session; both are attempted, first error wins.
        self._enter(result, Stage.MIGRATE)
        outcomes = [controller.migrate_config(), controller.migrate_session()]
        for outcome in outcomes:
            if not outcome.ok:
                return self._fail(Stage.MIGRATE, outcome.error, result)
        first_run = controller.first_time_run()
        if not first_run.ok:
            return self._fail(Stage.MIGRATE, first_run.error, result)

        # EnvironmentCheck
        self._enter(result, Stage.ENVIRONMENT_CHECK)
        try:
            user = self.user_lookup()
        except (OSError, KeyError, ImportError) as e:
            return self._fail(
                Stage.ENVIRONMENT_CHECK,
                EnvironmentCheckError("Unable to determine current user.", cause=e),
                result,
            )
        if not user:
            return self._fail(
                Stage.ENVIRONMENT_CHECK,
                EnvironmentCheckError("Unable to determine current user."),
                result,
            )

        # ConfigValidate
        self._enter(result, Stage.CONFIG_VALIDATE)
        loaded = controller.load_and_validate_config()
        if not loaded.ok:
            cause = loaded.error
            return self._fail(
                Stage.CONFIG_VALIDATE,
                ConfigError("Unable to access configuration file.", cause=cause),
                result,
            )
        result.config = loaded.value

        self._enter(result, Stage.READY)
        logger.debug("Bootstrap complete for user %s", user)
        return result
