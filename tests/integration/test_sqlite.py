"""SQLite 統合テスト: コンパイル → DB実行の一連フロー検証."""

from __future__ import annotations

import sqlite3

import pytest

from sqlmarkup import Bind, Builder, SqlMarkupError

TEMPLATE = (
    "select id, name from users where state=?{{age: and age>?}}"
    " order by id {{limit: limit :limit offset :offset}}"
)


class TestSqliteExecution:
    """sqlite3（named paramstyle）での実行."""

    def test_label_condition(self, sqlite_conn: sqlite3.Connection) -> None:
        builder = Builder().register("age", Bind.as_int(20))
        rows = builder.run(sqlite_conn, TEMPLATE, 1).fetchall()
        assert [row["id"] for row in rows] == [2, 3]

    def test_suppressed_condition(self, sqlite_conn: sqlite3.Connection) -> None:
        rows = Builder().run(sqlite_conn, TEMPLATE, 1).fetchall()
        assert [row["id"] for row in rows] == [1, 2, 3]

    def test_named_limit(self, sqlite_conn: sqlite3.Connection) -> None:
        builder = Builder().register("limit", Bind.as_int({":limit": 1, ":offset": 1}))
        rows = builder.run(sqlite_conn, TEMPLATE, 1).fetchall()
        assert [row["name"] for row in rows] == ["CTCC"]

    def test_in_list(self, sqlite_conn: sqlite3.Connection) -> None:
        cursor = Builder().run(
            sqlite_conn, "select id from users where id in (?) order by id", [[1, 3]]
        )
        assert [row["id"] for row in cursor.fetchall()] == [1, 3]

    def test_named_in_list(self, sqlite_conn: sqlite3.Connection) -> None:
        cursor = Builder().run(
            sqlite_conn,
            "select name from users where mobile in (:mobile) order by id",
            {":mobile": ["10000", "10010"]},
        )
        assert [row["name"] for row in cursor.fetchall()] == ["CTCC", "CUCC"]

    def test_quoted_markup_is_literal(self, sqlite_conn: sqlite3.Connection) -> None:
        cursor = Builder().run(sqlite_conn, "select '{{age}} ?' as v, ? as w", 1)
        row = cursor.fetchone()
        assert row["v"] == "{{age}} ?"
        assert row["w"] == 1

    def test_driver_error_is_not_wrapped(self, sqlite_conn: sqlite3.Connection) -> None:
        with pytest.raises(sqlite3.OperationalError) as exc_info:
            Builder().run(sqlite_conn, "select no_such_column from users where id=?", 1)
        assert not isinstance(exc_info.value, SqlMarkupError)
