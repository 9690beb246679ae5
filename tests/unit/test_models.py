from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from sql_reporter.models.domain import Origin, SqlQuery, to_sql_literal


def test_query_is_immutable() -> None:
    query = SqlQuery(number=1, sql="select 1", time=1.0)
    with pytest.raises(ValidationError):
        query.sql = "select 2"


def test_query_rejects_negative_time() -> None:
    with pytest.raises(ValidationError):
        SqlQuery(number=1, sql="select 1", time=-1)


def test_queries_compare_by_value() -> None:
    assert SqlQuery(number=1, sql="a", time=1.0) == SqlQuery(number=1, sql="a", time=1.0)
    assert SqlQuery(number=1, sql="a", time=1.0) != SqlQuery(number=2, sql="a", time=1.0)


def test_get_without_bindings_returns_raw_query() -> None:
    query = SqlQuery(number=1, sql="SELECT * FROM t WHERE id = ?", time=1.0)
    assert query.get() == "SELECT * FROM t WHERE id = ?"


def test_get_replaces_positional_bindings() -> None:
    query = SqlQuery(
        number=1,
        sql="INSERT INTO test(one, two, three, four) values(?, ?, ?, ?)",
        time=1.0,
        bindings=["O'Brien", 2, None, True],
    )
    assert query.get() == "INSERT INTO test(one, two, three, four) values('O''Brien', 2, null, 1)"


def test_get_replaces_named_bindings() -> None:
    query = SqlQuery(
        number=1,
        sql="UPDATE t SET name = :name WHERE id = :id AND ts > :missing",
        time=1.0,
        bindings={"name": "x", "id": 3},
    )
    assert query.get() == "UPDATE t SET name = 'x' WHERE id = 3 AND ts > :missing"


def test_get_skips_placeholders_inside_literals() -> None:
    query = SqlQuery(
        number=1,
        sql="SELECT '?', ':name', x::int FROM t WHERE a = ? AND b = :name",
        time=1.0,
        bindings=[5],
    )
    assert query.get() == "SELECT '?', ':name', x::int FROM t WHERE a = 5 AND b = :name"


def test_get_leaves_extra_placeholders() -> None:
    query = SqlQuery(number=1, sql="SELECT ?, ?", time=1.0, bindings=[1])
    assert query.get() == "SELECT 1, ?"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "null"),
        (False, "0"),
        (42, "42"),
        (1.5, "1.5"),
        (Decimal("9.99"), "9.99"),
        (datetime(2021, 6, 3, 10, 26), "'2021-06-03 10:26:00'"),
        (date(2021, 6, 3), "'2021-06-03'"),
        (b"\x00\x01", "<binary>"),
        ("it's", "'it''s'"),
    ],
)
def test_to_sql_literal(value, expected: str) -> None:
    assert to_sql_literal(value) == expected


def test_origin_from_argv() -> None:
    origin = Origin.from_argv(["manage.py", "migrate"])
    assert origin.is_console
    assert str(origin) == "(console) manage.py migrate"


def test_origin_for_request() -> None:
    origin = Origin.for_request("get", "http://localhost/test")
    assert not origin.is_console
    assert str(origin) == "(request) GET http://localhost/test"
