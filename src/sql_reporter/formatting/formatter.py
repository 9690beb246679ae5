from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime

from sql_reporter.config import Settings
from sql_reporter.models.domain import Origin, SqlQuery
from sql_reporter.store.memory import QueryLog

_NEWLINES_RE = re.compile(r"[ \t]*[\r\n]+[ \t]*")
_SEPARATOR = "-- " + "-" * 60


class Formatter:
    """Default formatter producing SQL comment headers and annotated queries."""

    def __init__(
        self,
        settings: Settings,
        origin: Origin | None = None,
        query_log: QueryLog | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings
        self._origin = origin or Origin()
        self._query_log = query_log
        self._clock = clock

    def get_line(self, query: SqlQuery) -> str:
        sql = query.get()
        if self._settings.formatting_new_lines_to_spaces:
            sql = _NEWLINES_RE.sub(" ", sql)
        sql = sql.strip()
        if not sql.endswith(";"):
            sql += ";"

        line = self._settings.formatting_entry_format.format_map(
            {
                "origin": self._origin,
                "query_nr": query.number,
                "datetime": self._timestamp(),
                "query_time": self.format_time(query.time),
                "query": sql,
            }
        )
        return line.rstrip("\r\n")

    def get_header(self) -> str:
        lines = [
            _SEPARATOR,
            f"-- Datetime:    {self._timestamp()}",
            f"-- Origin:      {self._origin}",
        ]
        if self._query_log is not None:
            lines.append(f"-- Query count: {self._query_log.count}")
            lines.append(f"-- Total time:  {self.format_time(self._query_log.total_time)}")
        lines.append(_SEPARATOR)
        return "\n".join(lines)

    def format_time(self, time_ms: float) -> str:
        if self._settings.use_seconds:
            seconds = f"{time_ms / 1000:.5f}".rstrip("0").rstrip(".")
            return seconds + "s"
        return f"{time_ms:.2f}ms"

    def _timestamp(self) -> str:
        return self._clock().strftime("%Y-%m-%d %H:%M:%S")
