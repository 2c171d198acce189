"""
Unit tests for environment-driven configuration.
"""
import os
import tempfile

import pytest

from collabexec.config import Config

ENV_VARS = [
    "COLLABEXEC_API_KEY",
    "COLLABEXEC_WORKSPACE_ROOT",
    "COLLABEXEC_TIMEOUT_SECONDS",
    "COLLABEXEC_MAX_CONCURRENCY",
    "COLLABEXEC_QUEUE_TIMEOUT_SECONDS",
    "COLLABEXEC_LOG_LEVEL",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = Config.load()
    assert config.api_key == ""
    assert config.workspace_root == os.path.join(tempfile.gettempdir(), "codecollab-exec")
    assert config.timeout_seconds == 10
    assert config.max_concurrency == 4
    assert config.queue_timeout_seconds == 30
    assert config.log_level == "INFO"
    assert config.port == 3001


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("COLLABEXEC_API_KEY", "key")
    monkeypatch.setenv("COLLABEXEC_WORKSPACE_ROOT", str(tmp_path))
    monkeypatch.setenv("COLLABEXEC_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("COLLABEXEC_MAX_CONCURRENCY", "16")
    monkeypatch.setenv("COLLABEXEC_QUEUE_TIMEOUT_SECONDS", "1")
    monkeypatch.setenv("COLLABEXEC_LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "8080")

    config = Config.from_env()
    assert config.api_key == "key"
    assert config.workspace_root == str(tmp_path)
    assert config.timeout_seconds == 2.5
    assert config.max_concurrency == 16
    assert config.queue_timeout_seconds == 1
    assert config.log_level == "DEBUG"
    assert config.port == 8080


def test_invalid_integer(monkeypatch):
    monkeypatch.setenv("COLLABEXEC_MAX_CONCURRENCY", "many")
    with pytest.raises(ValueError, match="COLLABEXEC_MAX_CONCURRENCY"):
        Config.load()


def test_invalid_number(monkeypatch):
    monkeypatch.setenv("COLLABEXEC_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ValueError, match="COLLABEXEC_TIMEOUT_SECONDS"):
        Config.load()


@pytest.mark.parametrize(
    "name,value", [("COLLABEXEC_TIMEOUT_SECONDS", "0"), ("COLLABEXEC_MAX_CONCURRENCY", "0")]
)
def test_non_positive_limits_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        Config.load()


def test_negative_queue_timeout_rejected(monkeypatch):
    monkeypatch.setenv("COLLABEXEC_QUEUE_TIMEOUT_SECONDS", "-5")
    with pytest.raises(ValueError, match="COLLABEXEC_QUEUE_TIMEOUT_SECONDS"):
        Config.load()


def test_zero_queue_timeout_allowed(monkeypatch):
    monkeypatch.setenv("COLLABEXEC_QUEUE_TIMEOUT_SECONDS", "0")
    assert Config.load().queue_timeout_seconds == 0
