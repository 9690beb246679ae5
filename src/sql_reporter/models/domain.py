from __future__ import annotations

import re
import sys
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Quoted literals are matched first so placeholders inside them are skipped.
_PLACEHOLDER_RE = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|\?"
    r"|(?<!:):([A-Za-z_][A-Za-z0-9_]*)"
)


def to_sql_literal(value: Any) -> str:
    """Render a bound parameter the way it would appear inline in SQL."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, datetime):
        return f"'{value:%Y-%m-%d %H:%M:%S}'"
    if isinstance(value, date):
        return f"'{value:%Y-%m-%d}'"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "<binary>"
    return "'" + str(value).replace("'", "''") + "'"


class SqlQuery(BaseModel):
    """A single executed query as handed over by the host."""

    model_config = ConfigDict(frozen=True)

    number: int
    sql: str
    time: float = Field(ge=0)
    bindings: list[Any] | dict[str, Any] = Field(default_factory=list)

    @property
    def raw_query(self) -> str:
        return self.sql

    def get(self) -> str:
        """Return the query with its bindings substituted inline."""
        if not self.bindings:
            return self.sql

        positional = iter(self.bindings) if isinstance(self.bindings, list) else iter(())
        named = self.bindings if isinstance(self.bindings, dict) else {}
        exhausted = object()

        def _replace(match: re.Match[str]) -> str:
            token = match.group(0)
            if token == "?":
                value = next(positional, exhausted)
                return token if value is exhausted else to_sql_literal(value)
            name = match.group(1)
            if name is not None:
                if name not in named:
                    return token
                return to_sql_literal(named[name])
            return token

        return _PLACEHOLDER_RE.sub(_replace, self.sql)


class FilterConfig(BaseModel):
    """Options the query filter and writer read for a single call."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    min_exec_time: float = Field(default=0.0, ge=0)
    include_pattern: str | None = None
    exclude_pattern: str | None = None
    override_log: bool = False
    directory: str


class Origin(BaseModel):
    """Where the logged queries came from: a CLI run or a web request."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["console", "request", "unknown"] = "unknown"
    value: str = ""

    @classmethod
    def from_argv(cls, argv: list[str] | None = None) -> Origin:
        args = sys.argv if argv is None else argv
        return cls(kind="console", value=" ".join(args))

    @classmethod
    def for_request(cls, method: str, url: str) -> Origin:
        return cls(kind="request", value=f"{method.upper()} {url}")

    @property
    def is_console(self) -> bool:
        return self.kind == "console"

    def __str__(self) -> str:
        return f"({self.kind}) {self.value}".rstrip()
