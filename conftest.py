"""Shared fixtures for the xmlequiv tests."""

from unittest.mock import Mock

import pytest

NOT_EQUAL_MESSAGE = "NOT EQUAL - from mock"


class RecordingLogger:
    """Logger that keeps every message for inspection."""

    def __init__(self):
        self.messages = []

    def log(self, message="", *args):
        self.messages.append(message % args if args else message)

    @property
    def text(self):
        return "\n".join(self.messages)


@pytest.fixture
def logger():
    return RecordingLogger()


def make_mock_asserter():
    """Assertion sink that fails with a recognisable exception instead of the test runner's own failure."""
    asserter = Mock()

    def is_true(label, condition):
        if not condition:
            raise Exception(NOT_EQUAL_MESSAGE)

    asserter.is_true.side_effect = is_true
    return asserter


@pytest.fixture
def mock_asserter():
    return make_mock_asserter()
