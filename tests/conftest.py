import logging

import pytest
from click.testing import CliRunner

from mc.cli.main import build_app, build_registry
from mc.console import LOGGER_NAME
from mc.state import EnvironmentDefaults


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real home folder and MC_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for name in ("MC_CONFIG_FOLDER", "MC_QUIET", "MC_MIMIC", "MC_JSON", "MC_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield home
    logging.getLogger(LOGGER_NAME).handlers.clear()


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "mc-config"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, config_dir):
    """Run the full app against a temp config folder."""

    def _invoke(*args, **kwargs):
        app = build_app(build_registry(EnvironmentDefaults()))
        return runner.invoke(app, ["--config-folder", str(config_dir), *args], **kwargs)

    return _invoke
