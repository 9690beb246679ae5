from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sql_reporter.config import Settings
from sql_reporter.writer import Writer

FIXED_NOW = datetime(2015, 2, 3, 6, 41, 31)
LOG_FILE_NAME = "2015-02-log.sql"


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep stray SQL_REPORTER_* variables and .env files out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("SQL_REPORTER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "test-dir" / "directory"


@pytest.fixture
def settings(log_dir: Path) -> Settings:
    return Settings(directory=str(log_dir))


@pytest.fixture
def formatter() -> MagicMock:
    mock = MagicMock()
    mock.get_line.return_value = "Sample log line"
    mock.get_header.return_value = "-- header"
    return mock


@pytest.fixture
def file_name() -> MagicMock:
    mock = MagicMock()
    mock.get_logfile.return_value = LOG_FILE_NAME
    return mock


@pytest.fixture
def writer(formatter: MagicMock, settings: Settings, file_name: MagicMock) -> Writer:
    return Writer(formatter, settings, file_name)
