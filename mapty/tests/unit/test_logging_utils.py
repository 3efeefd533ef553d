from __future__ import annotations

import logging

import pytest

from mapty.utils.logging import apply_preferences, configure_root, env_forces_debug, level_from_env


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("MAPTY_LOG_LEVEL", "MAPTY_DEBUG_LOGGING", "MAPTY_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_preferences_toggle_debug_without_env() -> None:
    assert apply_preferences(True) == logging.DEBUG
    assert apply_preferences(False) == logging.INFO
    assert env_forces_debug() is False


def test_explicit_env_level_wins(monkeypatch) -> None:
    monkeypatch.setenv("MAPTY_LOG_LEVEL", "warning")
    assert configure_root() == logging.WARNING
    assert apply_preferences(True) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_debug_flag_forces_debug(monkeypatch) -> None:
    monkeypatch.setenv("MAPTY_DEBUG", "1")
    assert env_forces_debug() is True
    assert apply_preferences(False) == logging.DEBUG


def test_unknown_level_name_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("MAPTY_LOG_LEVEL", "chatty")
    assert configure_root("ERROR") == logging.INFO


def test_level_from_explicit_mapping() -> None:
    assert level_from_env({}) is None
    assert level_from_env({"MAPTY_DEBUG_LOGGING": "on"}) == logging.DEBUG
    assert level_from_env({"MAPTY_LOG_LEVEL": "30", "MAPTY_DEBUG": "1"}) == logging.WARNING


def test_configure_root_quiets_http_connection_logs(monkeypatch) -> None:
    monkeypatch.setenv("MAPTY_DEBUG", "true")
    assert configure_root() == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_explicit_zero_level_is_honoured(monkeypatch) -> None:
    monkeypatch.setenv("MAPTY_LOG_LEVEL", "0")
    assert configure_root(logging.WARNING) == logging.NOTSET
    assert logging.getLogger().level == logging.NOTSET
