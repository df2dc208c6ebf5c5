"""
Pytest configuration and shared fixtures for the redaction tests.

Clears LOG_* environment variables so config tests start from defaults
regardless of the developer's shell or a stray .env file.
"""

import io
import os
import sys

import pytest

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

LOG_ENV_VARS = [
    "LOG_NAME",
    "LOG_LEVEL",
    "LOG_ENCODING",
    "LOG_CALLER_KEY",
    "LOG_FILTER_SPECS",
    "LOG_FILTER_SPECS_FILE",
    "LOG_FILTER_EXTEND_DEFAULT",
    "LOG_SCRUB_PII",
]


@pytest.fixture(autouse=True)
def clean_log_env(monkeypatch):
    """Remove LOG_* settings before each test."""
    for name in LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def sink():
    """In-memory byte sink."""
    return io.BytesIO()


class RecordingSink:
    """Sink double that records writes and flushes."""

    def __init__(self, fail_with=None):
        self.writes = []
        self.flushes = 0
        self.fail_with = fail_with

    def write(self, data):
        if self.fail_with is not None:
            raise self.fail_with
        self.writes.append(data)
        return len(data)

    def flush(self):
        if self.fail_with is not None:
            raise self.fail_with
        self.flushes += 1


@pytest.fixture
def recording_sink():
    return RecordingSink()
