import logging

import pytest

from sse_transform.config import Config


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("SSE_HOST", "SSE_PORT", "SSE_PING_INTERVAL_SECONDS", "SSE_MAX_UPDATES", "SSE_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_config_uses_defaults() -> None:
    config = Config()
    assert config.host == "127.0.0.1"
    assert config.port == 8080
    assert config.ping_interval_seconds == 5.0
    assert config.max_updates is None
    assert config.log_level == logging.INFO


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSE_HOST", " 0.0.0.0 ")
    monkeypatch.setenv("SSE_PORT", "9000")
    monkeypatch.setenv("SSE_PING_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("SSE_MAX_UPDATES", "3")
    monkeypatch.setenv("SSE_LOG_LEVEL", "debug")
    config = Config()
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.ping_interval_seconds == 0.5
    assert config.max_updates == 3
    assert config.log_level == logging.DEBUG


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("SSE_PORT", "eighty"),
        ("SSE_PING_INTERVAL_SECONDS", "soon"),
        ("SSE_PING_INTERVAL_SECONDS", "0"),
        ("SSE_MAX_UPDATES", "1.5"),
        ("SSE_LOG_LEVEL", "chatty"),
    ],
)
def test_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError, match=key):
        Config()
