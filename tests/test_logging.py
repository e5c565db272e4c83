"""Tests for logging configuration helpers."""

import pytest
import structlog
from pantry.utils.logging import bind_request, resolve_level, unbind_request


@pytest.mark.parametrize(
    "env,expected",
    [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("unknown", "INFO")],
)
def test_level_follows_environment(monkeypatch, env, expected):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("PROTEAN_ENV", env)
    assert resolve_level() == expected


def test_log_level_env_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert resolve_level() == "ERROR"


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert resolve_level("debug") == "DEBUG"


def test_request_context_binding():
    bind_request(user_id="user-001", path="/orders", role=None)
    assert structlog.contextvars.get_contextvars() == {"user_id": "user-001", "path": "/orders"}

    unbind_request()
    assert structlog.contextvars.get_contextvars() == {}
