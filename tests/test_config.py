"""Tests for environment-driven viewer settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from malcolm.config import load_settings
from malcolm.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "MALCOLM_FROM",
        "MALCOLM_TO",
        "MALCOLM_HISTORY_CAPACITY",
        "MALCOLM_INITIAL_LEVEL",
        "MALCOLM_BODY_PREVIEW_LENGTH",
        "MALCOLM_STORAGE_PATH",
        "MALCOLM_LOG_FILE",
        "MALCOLM_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.history_capacity == 100
    assert settings.initial_level == 3
    assert settings.body_preview_length == 512
    assert str(settings.from_addr) == "localhost:8000"
    assert str(settings.to_addr) == "localhost:5009"
    assert settings.log_file is None


def test_env_overrides(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.setenv("MALCOLM_FROM", "9000")
    monkeypatch.setenv("MALCOLM_TO", "api.internal:443")
    monkeypatch.setenv("MALCOLM_HISTORY_CAPACITY", "25")
    monkeypatch.setenv("MALCOLM_INITIAL_LEVEL", "5")
    monkeypatch.setenv("MALCOLM_STORAGE_PATH", str(tmp_path / "store"))
    monkeypatch.setenv("MALCOLM_LOG_FILE", "")
    monkeypatch.setenv("MALCOLM_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.history_capacity == 25
    assert settings.initial_level == 5
    assert settings.to_addr.port == 443
    assert settings.log_file is None
    assert settings.log_level == "DEBUG"
    summary = settings.safe_summary()
    assert summary["from"] == "localhost:9000"
    assert summary["storage_path"] == str(tmp_path / "store")


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("MALCOLM_HISTORY_CAPACITY", "0"),
        ("MALCOLM_INITIAL_LEVEL", "7"),
        ("MALCOLM_BODY_PREVIEW_LENGTH", "2"),
        ("MALCOLM_TO", "no-port-here"),
        ("MALCOLM_LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch: Any, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        load_settings()
