from __future__ import annotations

from sql_reporter.config import Settings, get_settings
from sql_reporter.formatting.file_name import FileName
from sql_reporter.formatting.formatter import Formatter
from sql_reporter.listener import QueryLogger
from sql_reporter.logging import setup_logging
from sql_reporter.models.domain import Origin
from sql_reporter.store.memory import QueryLog
from sql_reporter.writer import Writer


def create_writer(
    settings: Settings,
    origin: Origin | None = None,
    query_log: QueryLog | None = None,
) -> Writer:
    """Create a writer wired with the default formatter and file namer."""
    setup_logging(settings.log_level)
    formatter = Formatter(settings, origin=origin, query_log=query_log)
    file_name = FileName(settings, origin=origin)
    return Writer(formatter, settings, file_name)


def create_query_logger(
    settings: Settings | None = None,
    origin: Origin | None = None,
) -> QueryLogger:
    """Create a ``QueryLogger`` whose header statistics track its own query log."""
    settings = settings or get_settings()
    query_log = QueryLog()
    writer = create_writer(settings, origin=origin, query_log=query_log)
    return QueryLogger(writer, query_log)
