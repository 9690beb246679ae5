from __future__ import annotations

from sql_reporter.filters.patterns import matches
from sql_reporter.models.domain import FilterConfig, SqlQuery


def rejection_reason(query: SqlQuery, config: FilterConfig) -> str | None:
    """Return why ``query`` should not be logged, or None when it should.

    Checks run cheapest first. Patterns only ever see the raw SQL, never the
    bound parameters.
    """
    if not config.enabled:
        return "disabled"
    if query.time < config.min_exec_time:
        return "below_min_exec_time"
    if config.exclude_pattern is not None and matches(config.exclude_pattern, query.raw_query):
        return "excluded"
    if config.include_pattern is not None and not matches(config.include_pattern, query.raw_query):
        return "not_included"
    return None


def should_log(query: SqlQuery, config: FilterConfig) -> bool:
    return rejection_reason(query, config) is None
