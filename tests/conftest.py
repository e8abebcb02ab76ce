"""Shared fixtures for envfiles tests."""

import io
from typing import Any, List, Tuple

import pytest

from envfiles.config import reset_settings
from envfiles.logger import BuildConsoleLogger, Logger, reset_loggers


class RecordingLogger(Logger):
    """Logger that keeps every call for assertions."""

    def __init__(self):
        self.records: List[Tuple[str, str, dict]] = []

    def _record(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._record("error", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._record("critical", message, **kwargs)

    def get_session_id(self) -> str:
        return "recording"

    def messages(self, level: str = None) -> List[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output) -> BuildConsoleLogger:
    return BuildConsoleLogger(output=console_output)


@pytest.fixture
def diagnostics() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture(autouse=True)
def _clean_settings():
    reset_settings()
    yield
    reset_settings()
    reset_loggers()
