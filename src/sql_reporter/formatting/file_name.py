from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sql_reporter.config import Settings
from sql_reporter.models.domain import Origin


class FileName:
    """Monthly log file names, e.g. ``2015-02-log.sql``."""

    def __init__(
        self,
        settings: Settings,
        origin: Origin | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings
        self._origin = origin
        self._clock = clock

    def get_logfile(self) -> str:
        stem = self._clock().strftime(self._settings.queries_file_name)
        return stem + self._suffix() + self._settings.extension

    def _suffix(self) -> str:
        if self._origin is not None and self._origin.is_console:
            return self._settings.console_suffix
        return ""
