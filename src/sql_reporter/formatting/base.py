from __future__ import annotations

from typing import Protocol

from sql_reporter.models.domain import SqlQuery


class LineFormatter(Protocol):
    """Renders queries into log text."""

    def get_line(self, query: SqlQuery) -> str:
        """Render one query, without a trailing newline."""
        ...

    def get_header(self) -> str:
        """Render the block preamble, without a trailing newline. May be empty."""
        ...


class FileNamer(Protocol):
    """Computes the log file name for the current moment."""

    def get_logfile(self) -> str: ...
