#!/usr/bin/env python3
"""sqlmarkup Search Example.

This example demonstrates the basic usage of sqlmarkup:
- Optional conditions with labels ({{label: ...}})
- Removing a condition by registering None (or not registering it)
- IN clause expansion for ? and :name placeholders
- Typed bind values with Bind
- Executing on sqlite3 with Builder.run

Usage:
    uv run python examples/search_example.py
"""

from __future__ import annotations

import sqlite3

from sqlmarkup import Bind, Builder

SEARCH_SQL = (
    "SELECT id, name, department FROM users WHERE state = ?"
    "{{department: AND department = ?}}"
    "{{ids: AND id IN (?)}}"
    " ORDER BY id"
    "{{page: LIMIT :limit OFFSET :offset}}"
)


# =============================================================================
# Database Setup
# =============================================================================


def setup_database() -> sqlite3.Connection:
    """Set up SQLite database for testing."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row

    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            department TEXT,
            state INTEGER NOT NULL
        )
    """)

    sample_data = [
        ("Tanaka Taro", "Sales", 1),
        ("Suzuki Hanako", "Development", 1),
        ("Sato Ichiro", "Sales", 1),
        ("Yamada Misaki", "Development", 0),
        ("Takahashi 100% Achieved", "Sales", 1),
    ]
    conn.executemany(
        "INSERT INTO users (name, department, state) VALUES (?, ?, ?)",
        sample_data,
    )
    conn.commit()
    return conn


# =============================================================================
# Demos
# =============================================================================


def show(conn: sqlite3.Connection, builder: Builder, bind: object) -> None:
    """Compile SEARCH_SQL, print it and run it."""
    result = builder.compile(SEARCH_SQL, bind)
    print(f"Generated SQL:\n{result.sql}")
    print(f"Parameters: {result.named_params}")
    print()

    cursor = builder.run(conn, SEARCH_SQL, bind)
    print("Results:")
    for row in cursor.fetchall():
        print(f"  {dict(row)}")
    print()


def demo_no_labels(conn: sqlite3.Connection) -> None:
    """Demo: Unregistered labels are removed from the SQL."""
    print("=" * 60)
    print("[NO LABELS] Only the fixed condition remains")
    print("=" * 60)

    show(conn, Builder(), 1)


def demo_optional_condition(conn: sqlite3.Connection) -> None:
    """Demo: Register a label to keep its condition."""
    print("=" * 60)
    print("[OPTIONAL CONDITION] department = 'Sales'")
    print("=" * 60)

    builder = Builder().register("department", "Sales")
    show(conn, builder, 1)


def demo_in_clause(conn: sqlite3.Connection) -> None:
    """Demo: IN clause expansion.

    A list bound to ? is expanded to one placeholder per element.
    Example: id IN (?) -> id IN (:__2_1__,:__2_2__,:__2_3__)
    """
    print("=" * 60)
    print("[IN CLAUSE] Search by multiple IDs")
    print("=" * 60)

    builder = Builder().register("ids", Bind.as_int([1, 3, 5]))
    show(conn, builder, 1)


def demo_paging(conn: sqlite3.Connection) -> None:
    """Demo: Named placeholders inside a label."""
    print("=" * 60)
    print("[PAGING] LIMIT :limit OFFSET :offset")
    print("=" * 60)

    builder = (
        Builder()
        .register("department", "Sales")
        .register("page", Bind.as_int({":limit": 2, ":offset": 1}))
    )
    show(conn, builder, 1)


def demo_remove_condition(conn: sqlite3.Connection) -> None:
    """Demo: Registering None removes a previously registered label."""
    print("=" * 60)
    print("[REMOVE CONDITION] department registered, then removed")
    print("=" * 60)

    builder = Builder().register("department", "Sales")
    builder.register("department", None)
    show(conn, builder, 1)


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    """Run the examples."""
    print("sqlmarkup Search Example")
    print("=" * 60)
    print()

    conn = setup_database()

    demo_no_labels(conn)
    demo_optional_condition(conn)
    demo_in_clause(conn)
    demo_paging(conn)
    demo_remove_condition(conn)

    print("=" * 60)
    print("Example completed")
    print("=" * 60)


if __name__ == "__main__":
    main()
