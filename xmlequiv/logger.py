"""Loggers used by the testers to narrate what they are doing."""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional, Protocol, TextIO


class SimpleLogger(Protocol):
    """Receives diagnostic narration. Calling log() without a message writes a blank separator line."""

    def log(self, message: str = "", *args: Any) -> None:
        ...


class ConsoleLogger:
    """Prints narration to a stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def log(self, message: str = "", *args: Any) -> None:
        if args:
            message = message % args
        print(message, file=self.stream or sys.stdout)


class StandardLogger:
    """Forwards narration to a logging.Logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("xmlequiv")
        self.level = level

    def log(self, message: str = "", *args: Any) -> None:
        self.logger.log(self.level, message, *args)
