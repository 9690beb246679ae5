from __future__ import annotations

import itertools
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from sql_reporter.models.domain import SqlQuery

# Shared across logs so numbers stay monotonic for the whole process.
_sequence = itertools.count(1)


def next_query_number() -> int:
    return next(_sequence)


class QueryLog:
    """In-memory record of the queries captured for one unit of work."""

    def __init__(self) -> None:
        self._queries: list[SqlQuery] = []

    def add(
        self,
        sql: str,
        bindings: Sequence[Any] | Mapping[str, Any] | None = None,
        time_ms: float = 0.0,
    ) -> SqlQuery:
        if bindings is None:
            bound: list[Any] | dict[str, Any] = []
        elif isinstance(bindings, Mapping):
            bound = dict(bindings)
        else:
            bound = list(bindings)
        query = SqlQuery(number=next_query_number(), sql=sql, time=time_ms, bindings=bound)
        self._queries.append(query)
        return query

    @property
    def count(self) -> int:
        return len(self._queries)

    @property
    def total_time(self) -> float:
        return sum(q.time for q in self._queries)

    def clear(self) -> None:
        self._queries.clear()

    def __iter__(self) -> Iterator[SqlQuery]:
        return iter(self._queries)

    def __len__(self) -> int:
        return len(self._queries)
