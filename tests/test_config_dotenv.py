from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_log_layout import cli as cli_module
from lib_log_layout import config as layout_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> None:
    """Reset shared dotenv state around each test."""

    layout_config._reset_dotenv_state_for_testing()
    yield
    layout_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LAYOUT_UNDEFINED=from-dotenv\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("LOG_LAYOUT_UNDEFINED", raising=False)

    loaded = layout_config.enable_dotenv()

    try:
        assert loaded == env_file.resolve()
        assert os.environ["LOG_LAYOUT_UNDEFINED"] == "from-dotenv"
    finally:
        os.environ.pop("LOG_LAYOUT_UNDEFINED", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("LOG_LAYOUT_UNDEFINED=from-dotenv\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LAYOUT_UNDEFINED", "from-shell")

    assert layout_config.enable_dotenv() is not None
    assert os.environ["LOG_LAYOUT_UNDEFINED"] == "from-shell"


def test_enable_dotenv_loads_only_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("LOG_LAYOUT_THEME=dark\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOG_LAYOUT_THEME", raising=False)

    try:
        first = layout_config.enable_dotenv()
        (tmp_path / ".env").write_text("LOG_LAYOUT_THEME=neon\n")
        os.environ.pop("LOG_LAYOUT_THEME", None)
        second = layout_config.enable_dotenv()

        assert first == second
        assert "LOG_LAYOUT_THEME" not in os.environ
    finally:
        os.environ.pop("LOG_LAYOUT_THEME", None)


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (True, None, True),
        (False, "1", False),
        (None, "yes", True),
        (None, "off", False),
        (None, None, False),
    ],
)
def test_should_use_dotenv_precedence(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert layout_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


@pytest.mark.parametrize(
    "args, env_value, expected_calls",
    [
        (["--use-dotenv", "info"], None, 1),
        (["--no-use-dotenv", "info"], "1", 0),
        (["info"], "1", 1),
        (["info"], None, 0),
    ],
)
def test_cli_dotenv_toggle_precedence(
    monkeypatch: pytest.MonkeyPatch,
    args: list[str],
    env_value: str | None,
    expected_calls: int,
) -> None:
    calls: list[bool] = []
    monkeypatch.setattr(cli_module, "enable_dotenv", lambda: calls.append(True))
    if env_value is None:
        monkeypatch.delenv(layout_config.DOTENV_ENV_VAR, raising=False)
    else:
        monkeypatch.setenv(layout_config.DOTENV_ENV_VAR, env_value)

    result = CliRunner().invoke(cli_module.cli, args)

    assert result.exit_code == 0
    assert len(calls) == expected_calls
