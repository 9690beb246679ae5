from __future__ import annotations

from pathlib import Path

import structlog

from sql_reporter.config import Settings
from sql_reporter.errors import LogWriteError
from sql_reporter.filters.query_filter import rejection_reason
from sql_reporter.formatting.base import FileNamer, LineFormatter
from sql_reporter.models.domain import SqlQuery

logger = structlog.get_logger()


class Writer:
    """Filters executed queries and persists accepted ones to monthly log files.

    In append mode every accepted query adds a ``header + line`` block. With
    ``queries_override_log`` the first accepted query of this instance replaces
    the file content and later ones append only their line.
    """

    def __init__(
        self,
        formatter: LineFormatter,
        settings: Settings,
        file_name: FileNamer,
    ) -> None:
        self._formatter = formatter
        self._settings = settings
        self._file_name = file_name
        self._first_write_done = False
        self._ensured_directories: set[Path] = set()

    def write_query(self, query: SqlQuery) -> bool:
        config = self._settings.filter_config()
        reason = rejection_reason(query, config)
        if reason is not None:
            logger.debug("sql_query_skipped", number=query.number, reason=reason)
            return False

        directory = Path(config.directory)
        path = directory / self._file_name.get_logfile()
        self._ensure_directory(directory)
        existed = path.exists()

        line = self._formatter.get_line(query)
        override = config.override_log and not self._first_write_done
        if config.override_log and self._first_write_done:
            # Override session already has its header.
            content = line + "\n"
        else:
            content = self._formatter.get_header() + "\n" + line + "\n"

        self._write_lines(path, content, override=override)
        self._first_write_done = True

        if not existed:
            logger.info("sql_log_file_created", path=str(path))
        logger.debug(
            "sql_query_written",
            number=query.number,
            path=str(path),
            mode="override" if override else "append",
        )
        return True

    def _ensure_directory(self, directory: Path) -> None:
        if directory in self._ensured_directories:
            return
        if not directory.is_dir():
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.error("sql_log_write_failed", path=str(directory), error=str(exc))
                raise LogWriteError(str(directory), str(exc)) from exc
            logger.info("sql_log_directory_created", path=str(directory))
        self._ensured_directories.add(directory)

    def _write_lines(self, path: Path, content: str, *, override: bool = False) -> None:
        """Append ``content`` to ``path``, or replace the file when ``override``."""
        mode = "w" if override else "a"
        try:
            with open(path, mode, encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as exc:
            logger.error("sql_log_write_failed", path=str(path), error=str(exc))
            raise LogWriteError(str(path), str(exc)) from exc
