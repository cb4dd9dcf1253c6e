"""pytest 共通設定: テスト用 DB とコンパイラ."""

from __future__ import annotations

import sqlite3
from collections.abc import Generator

import pytest

from sqlmarkup import Builder, config

USERS_DDL = """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY,
        mobile TEXT,
        name TEXT,
        age INTEGER,
        state INTEGER,
        created_at INTEGER
    )
"""

USERS_ROWS = [
    ("10086", "CMCC", 20, 1, 1569343838),
    ("10000", "CTCC", 21, 1, 1569343838),
    ("10010", "CUCC", 22, 1, 1569343838),
]


@pytest.fixture
def builder() -> Builder:
    """既定設定のコンパイラ."""
    return Builder()


@pytest.fixture
def english_messages(monkeypatch: pytest.MonkeyPatch) -> None:
    """エラーメッセージを英語に切り替える."""
    monkeypatch.setattr(config, "ERROR_MESSAGE_LANGUAGE", "en")


@pytest.fixture
def sqlite_conn() -> Generator[sqlite3.Connection, None, None]:
    """テストデータ投入済みの SQLite インメモリ DB."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute(USERS_DDL)
    conn.executemany(
        "INSERT INTO users (mobile, name, age, state, created_at) VALUES (?, ?, ?, ?, ?)",
        USERS_ROWS,
    )
    conn.commit()
    try:
        yield conn
    finally:
        conn.close()
