"""Assertion sinks that turn a verdict into a test failure."""

from __future__ import annotations

from typing import Optional, Protocol

from .exceptions import XmlAssertionError
from .logger import ConsoleLogger, SimpleLogger


class LogAsserter(Protocol):
    """Decides how a failed assertion halts the calling test."""

    def is_true(self, label: str, condition: bool) -> None:
        ...


class RaisingLogAsserter:
    """Logs each assertion and raises XmlAssertionError when it fails."""

    def __init__(self, logger: Optional[SimpleLogger] = None):
        self.logger = logger or ConsoleLogger()

    def is_true(self, label: str, condition: bool) -> None:
        self.logger.log("Asserting '%s' is true", label)
        if not condition:
            raise XmlAssertionError(label)
