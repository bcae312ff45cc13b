"""Pytest configuration and fixtures for composerr tests."""

import pytest

from composerr import CREATE_EVENT, on
from composerr.context import reset_context


class RecordingLogger:
    """Logger double that records (level, payload) for every call."""

    def __init__(self, levels=("debug", "info", "warning", "error", "critical")):
        self.records = []
        for level in levels:
            setattr(self, level, self._recorder(level))

    def _recorder(self, level):
        def record(payload):
            self.records.append((level, payload))
        return record


@pytest.fixture(autouse=True)
def fresh_context():
    """Run every test against default config, logger and event bus."""
    reset_context()
    yield
    reset_context()


@pytest.fixture
def recording_logger():
    """Logger with the common level methods."""
    return RecordingLogger()


@pytest.fixture
def created_errors():
    """Errors announced on the create event while the test runs."""
    received = []
    on(CREATE_EVENT, received.append)
    return received
