from __future__ import annotations

import logging
import sys

import structlog

# Loggers whose chatter duplicates what the reporter already writes to disk.
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def setup_logging(level: str = "INFO", *, json_output: bool | None = None) -> None:
    """Configure stdlib logging and structlog for the reporter.

    ``json_output`` forces the renderer; by default a console renderer is used
    when stderr is a terminal and JSON lines otherwise.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=log_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if json_output is None:
        json_output = not sys.stderr.isatty()
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
