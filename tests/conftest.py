"""
Pytest configuration and shared fixtures.
"""

import io
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from rich.console import Console

from participant_tracker.config import ROOT_ENV
from participant_tracker.util.log import LogConfig, Logger, LogLevel, reset_logger

SEOUL = ZoneInfo("Asia/Seoul")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear logging environment and the process-wide logger between tests."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv(ROOT_ENV, raising=False)
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def app_root(tmp_path, monkeypatch):
    """Point the application root at a temporary directory."""
    monkeypatch.setenv(ROOT_ENV, str(tmp_path))
    return tmp_path


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2025-05-21 17:02 Seoul time."""
    return lambda: datetime(2025, 5, 21, 17, 2, 26, tzinfo=SEOUL)


@pytest.fixture
def make_logger(fixed_clock):
    """Factory for loggers with a frozen clock, printing to stdout."""

    def _make(threshold=LogLevel.INFO, color=True):
        return Logger(LogConfig(threshold=threshold, color=color), clock=fixed_clock)

    return _make


@pytest.fixture
def buffer_logger(fixed_clock):
    """Logger at LOG threshold writing into an in-memory buffer."""
    buffer = io.StringIO()
    logger = Logger(
        LogConfig(threshold=LogLevel.LOG, color=False),
        console=Console(file=buffer, highlight=False),
        clock=fixed_clock,
    )
    logger.buffer = buffer
    return logger
