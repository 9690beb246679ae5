from __future__ import annotations


class SqlReporterError(Exception):
    """Base error for the SQL reporter."""


class InvalidPatternError(SqlReporterError, ValueError):
    """Raised when an include or exclude pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid query pattern {pattern!r}: {reason}")


class LogWriteError(SqlReporterError, OSError):
    """Raised when the log directory or file cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write SQL log {path}: {reason}")
