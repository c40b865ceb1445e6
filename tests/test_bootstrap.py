"""Tests for the startup pipeline."""

import logging
from unittest.mock import MagicMock

import pytest

from mc.bootstrap import Bootstrapper, Stage, runtime_mode_from_flags
from mc.cli.main import build_registry
from mc.errors import ConfigError, MigrationError, Result, RuntimeIncompatibleError


def _params(config_dir, **overrides):
    params = {"config_folder": str(config_dir), "quiet": False, "mimic": False, "json": False, "debug": False}
    params.update(overrides)
    return params


def _controller(calls, runtime_error=None, config_error=None, session_error=None, load=None):
    """A fake controller recording the order of calls."""
    ctl = MagicMock()

    def record(name, value):
        def _call():
            calls.append(name)
            return value
        return _call

    ctl.verify_runtime_compatibility.side_effect = record("runtime", runtime_error)
    ctl.migrate_config.side_effect = record(
        "migrate_config", Result.failure(config_error) if config_error else Result.success([]))
    ctl.migrate_session.side_effect = record(
        "migrate_session", Result.failure(session_error) if session_error else Result.success([]))
    ctl.first_time_run.side_effect = record("first_time_run", Result.success(False))
    ctl.load_and_validate_config.side_effect = record("load", load or Result.success("config"))
    return ctl


@pytest.fixture
def registry():
    return build_registry()


class TestRuntimeMode:
    def test_quiet_and_debug_are_independent(self, registry, config_dir):
        mode = runtime_mode_from_flags(registry, _params(config_dir, quiet=True, debug=True))
        assert mode.quiet is True
        assert mode.debug is True
        assert mode.json is False
        assert mode.mimic is False

    def test_config_folder_override(self, registry, config_dir):
        mode = runtime_mode_from_flags(registry, _params(config_dir))
        assert mode.config_dir == config_dir

    def test_default_config_folder(self, registry, isolated_env):
        mode = runtime_mode_from_flags(registry, {"config_folder": ""})
        assert mode.config_dir.parent == isolated_env


class TestOrdering:
    def test_happy_path_order(self, registry, config_dir):
        calls = []
        users = []
        boot = Bootstrapper(
            registry,
            controller_factory=lambda path: _controller(calls),
            user_lookup=lambda: users.append("user") or "alice",
        )
        result = boot.run(_params(config_dir))
        assert result.ok
        assert result.stage is Stage.READY
        assert result.config == "config"
        assert calls == ["runtime", "migrate_config", "migrate_session", "first_time_run", "load"]
        assert users == ["user"]

    def test_runtime_failure_stops_before_config_access(self, registry, config_dir):
        calls = []
        ctl = _controller(calls, runtime_error=RuntimeIncompatibleError("Unsupported operating system ‘plan9’."))
        boot = Bootstrapper(registry, controller_factory=lambda path: ctl, user_lookup=lambda: "alice")
        result = boot.run(_params(config_dir))
        assert not result.ok
        assert result.stage is Stage.FATAL
        assert result.failed_stage is Stage.RUNTIME_CHECK
        assert calls == ["runtime"]
        ctl.migrate_config.assert_not_called()
        ctl.migrate_session.assert_not_called()
        ctl.load_and_validate_config.assert_not_called()

    def test_both_migrations_attempted_first_error_wins(self, registry, config_dir):
        calls = []
        ctl = _controller(
            calls,
            config_error=MigrationError("config broke"),
            session_error=MigrationError("session broke"),
        )
        result = Bootstrapper(registry, controller_factory=lambda p: ctl, user_lookup=lambda: "a").run(
            _params(config_dir))
        assert result.failed_stage is Stage.MIGRATE
        assert result.error.message == "config broke"
        assert calls == ["runtime", "migrate_config", "migrate_session"]

    def test_session_migration_failure_is_fatal(self, registry, config_dir):
        calls = []
        ctl = _controller(calls, session_error=MigrationError("session broke"))
        result = Bootstrapper(registry, controller_factory=lambda p: ctl, user_lookup=lambda: "a").run(
            _params(config_dir))
        assert result.failed_stage is Stage.MIGRATE
        assert "load" not in calls

    def test_unknown_user_is_fatal(self, registry, config_dir):
        calls = []

        def no_user():
            raise KeyError("uid not found")

        result = Bootstrapper(registry, controller_factory=lambda p: _controller(calls), user_lookup=no_user).run(
            _params(config_dir))
        assert result.failed_stage is Stage.ENVIRONMENT_CHECK
        assert result.error.message == "Unable to determine current user."
        assert "load" not in calls

    def test_invalid_config_is_fatal(self, registry, config_dir):
        calls = []
        ctl = _controller(calls, load=Result.failure(ConfigError("Invalid configuration file")))
        result = Bootstrapper(registry, controller_factory=lambda p: ctl, user_lookup=lambda: "a").run(
            _params(config_dir))
        assert result.failed_stage is Stage.CONFIG_VALIDATE
        assert isinstance(result.error, ConfigError)
        assert result.error.message == "Unable to access configuration file."
        assert result.config is None


class TestRealController:
    def test_fresh_folder_reaches_ready(self, registry, config_dir):
        result = Bootstrapper(registry, user_lookup=lambda: "alice").run(_params(config_dir))
        assert result.ok
        assert (config_dir / "config.json").is_file()
        assert "play" in result.config.aliases

    def test_repeated_bootstrap_is_stable(self, registry, config_dir):
        boot = Bootstrapper(registry, user_lookup=lambda: "alice")
        boot.run(_params(config_dir))
        before = (config_dir / "config.json").read_bytes()
        assert boot.run(_params(config_dir)).ok
        assert (config_dir / "config.json").read_bytes() == before

    def test_debug_sets_log_level(self, registry, config_dir):
        Bootstrapper(registry, user_lookup=lambda: "a").run(_params(config_dir, debug=True, quiet=True))
        assert logging.getLogger("mc").level == logging.DEBUG
        Bootstrapper(registry, user_lookup=lambda: "a").run(_params(config_dir, quiet=True))
        assert logging.getLogger("mc").level == logging.ERROR
