"""
Build console logger.

The console is the human-readable log a user sees for a single build. Every
line is written as ``[envfile] <message>`` and flushed immediately; structured
kwargs are not rendered on the console. When a diagnostics logger is
attached every console line is also sent to it at debug level.
"""

import sys
import uuid
from typing import Any, Optional, TextIO

from .interface import Logger

CONSOLE_PREFIX = "[envfile] "


class BuildConsoleLogger(Logger):
    """Write prefixed, unstructured lines to a build console stream.

    Example:
        console = BuildConsoleLogger(output=build_log)
        console.info("Reading : app.properties")
        # build_log now contains "[envfile] Reading : app.properties\\n"
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        prefix: str = CONSOLE_PREFIX,
        diagnostics: Optional[Logger] = None,
    ):
        """Initialize the console logger.

        Args:
            output: Console stream (default: stdout at call time)
            prefix: Text prepended to every console line
            diagnostics: Optional logger that also receives every line,
                at debug level, with its structured kwargs and the
                console level as ``console_level``
        """
        self._output = output
        self._prefix = prefix
        self._diagnostics = diagnostics
        self._session_id = str(uuid.uuid4())

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def get_session_id(self) -> str:
        return self._session_id

    def println(self, message: str) -> None:
        """Write one raw console line."""
        print(f"{self._prefix}{message}", file=self.output, flush=True)

    def _emit(self, level: str, message: str, **kwargs: Any) -> None:
        self.println(message)
        if self._diagnostics is not None:
            self._diagnostics.debug(message, console_level=level, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._emit("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("error", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._emit("critical", message, **kwargs)
