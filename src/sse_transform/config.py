import logging
import os
from typing import Optional
from typing import final

from dotenv import load_dotenv

load_dotenv()


def get_environment_variable_or_default(
    key: str,
    default: str | None,
) -> str | None:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Environment variable '{key}' must be an integer, got '{value}'.") from e


def _parse_positive_float(key: str, value: str) -> float:
    try:
        result = float(value)
    except ValueError as e:
        raise ValueError(f"Environment variable '{key}' must be a number, got '{value}'.") from e
    if not result > 0:
        raise ValueError(f"Environment variable '{key}' must be positive, got '{value}'.")
    return result


@final
class Config:
    def __init__(self) -> None:
        self._host = "127.0.0.1"
        self._port = 8080
        self._ping_interval_seconds = 5.0
        self._max_updates: Optional[int] = None
        self._log_level = logging.INFO
        self.reload()

    def reload(self) -> None:
        load_dotenv()
        self._host = get_environment_variable_or_default("SSE_HOST", "127.0.0.1") or "127.0.0.1"
        self._port = _parse_int("SSE_PORT", get_environment_variable_or_default("SSE_PORT", "8080") or "8080")
        self._ping_interval_seconds = _parse_positive_float(
            "SSE_PING_INTERVAL_SECONDS",
            get_environment_variable_or_default("SSE_PING_INTERVAL_SECONDS", "5") or "5",
        )
        max_updates_str = get_environment_variable_or_default("SSE_MAX_UPDATES", None)
        if max_updates_str is not None:
            self._max_updates = _parse_int("SSE_MAX_UPDATES", max_updates_str)
        else:
            self._max_updates = None

        log_level_name = (get_environment_variable_or_default("SSE_LOG_LEVEL", "INFO") or "INFO").upper()
        levels = logging.getLevelNamesMapping()
        if log_level_name not in levels:
            raise ValueError(f"Environment variable 'SSE_LOG_LEVEL' has unknown log level '{log_level_name}'.")
        self._log_level = levels[log_level_name]

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def ping_interval_seconds(self) -> float:
        return self._ping_interval_seconds

    @property
    def max_updates(self) -> Optional[int]:
        """Number of updates after which `/events` ends the stream. `None` means unlimited."""
        return self._max_updates

    @property
    def log_level(self) -> int:
        return self._log_level
