from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from typing import Any

import structlog
from sqlalchemy import event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.ext.asyncio import AsyncEngine

from sql_reporter.store.memory import QueryLog
from sql_reporter.writer import Writer

logger = structlog.get_logger()

_START_KEY = "sql_reporter_query_start"


class QueryLogger:
    """Host hook: captures executed statements and hands them to a ``Writer``."""

    def __init__(self, writer: Writer, query_log: QueryLog | None = None) -> None:
        self._writer = writer
        self.query_log = query_log if query_log is not None else QueryLog()
        self._engines: list[Engine] = []

    def record(
        self,
        sql: str,
        bindings: Sequence[Any] | Mapping[str, Any] | None = None,
        time_ms: float = 0.0,
    ) -> bool:
        query = self.query_log.add(sql, bindings, time_ms)
        return self._writer.write_query(query)

    def attach(self, engine: Engine | AsyncEngine) -> None:
        sync_engine = _sync_engine(engine)
        if sync_engine in self._engines:
            return
        event.listen(sync_engine, "before_cursor_execute", self._before_cursor_execute)
        event.listen(sync_engine, "after_cursor_execute", self._after_cursor_execute)
        event.listen(sync_engine, "handle_error", self._handle_error)
        self._engines.append(sync_engine)
        logger.info("sql_reporter_attached", url=sync_engine.url.render_as_string())

    def detach(self, engine: Engine | AsyncEngine) -> None:
        sync_engine = _sync_engine(engine)
        if sync_engine not in self._engines:
            return
        event.remove(sync_engine, "before_cursor_execute", self._before_cursor_execute)
        event.remove(sync_engine, "after_cursor_execute", self._after_cursor_execute)
        event.remove(sync_engine, "handle_error", self._handle_error)
        self._engines.remove(sync_engine)

    def _before_cursor_execute(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        conn.info.setdefault(_START_KEY, []).append(time.perf_counter())

    def _after_cursor_execute(
        self,
        conn: Connection,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        started = conn.info.get(_START_KEY)
        if not started:
            return
        elapsed_ms = (time.perf_counter() - started.pop()) * 1000
        if executemany and parameters:
            parameters = parameters[0]
        self.record(statement, parameters or None, elapsed_ms)

    def _handle_error(self, exception_context: Any) -> None:
        # after_cursor_execute never fires for a failed statement.
        conn = exception_context.connection
        if conn is None:
            return
        started = conn.info.get(_START_KEY)
        if started:
            started.pop()


def _sync_engine(engine: Engine | AsyncEngine) -> Engine:
    if isinstance(engine, AsyncEngine):
        return engine.sync_engine
    return engine
