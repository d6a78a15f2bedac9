"""
SQL text builders for single-table CRUD statements.

Every builder takes plain column lists and returns a statement with one
``?`` placeholder per bound value. Values must be bound in the order the
columns were given; for UPDATE the SET values come before the key values.
"""

from typing import Sequence


def quote_identifier(name: str) -> str:
    """Quote a table or column name for SQLite."""
    return '"' + name.replace('"', '""') + '"'


def count_placeholders(sql: str) -> int:
    """Count ``?`` placeholders outside of quoted identifiers and literals."""
    count = 0
    quote = None
    for char in sql:
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "?":
            count += 1
    return count


def where_clause(key_columns: Sequence[str]) -> str:
    """Equality-AND condition over ``key_columns``, in the given order."""
    if not key_columns:
        raise ValueError("A WHERE clause needs at least one key column")
    return " AND ".join(f"{quote_identifier(column)} = ?" for column in key_columns)


def build_select_all(table: str) -> str:
    return f"SELECT * FROM {quote_identifier(table)}"


def build_select_by_key(table: str, key_columns: Sequence[str]) -> str:
    return f"SELECT * FROM {quote_identifier(table)} WHERE {where_clause(key_columns)}"


def build_insert(table: str, columns: Sequence[str]) -> str:
    """
    INSERT of exactly ``columns``, returning the stored row.

    Columns left out are filled by the schema's own defaults; with no
    columns at all the row is created from ``DEFAULT VALUES``.
    """
    if not columns:
        return f"INSERT INTO {quote_identifier(table)} DEFAULT VALUES RETURNING *"

    column_list = ", ".join(quote_identifier(column) for column in columns)
    placeholders = ", ".join("?" for _ in columns)
    return (
        f"INSERT INTO {quote_identifier(table)} ({column_list}) "
        f"VALUES ({placeholders}) RETURNING *"
    )


def build_update(
    table: str, set_columns: Sequence[str], key_columns: Sequence[str]
) -> str:
    """UPDATE of ``set_columns`` for the row matching ``key_columns``."""
    if not set_columns:
        raise ValueError("An UPDATE needs at least one column to set")

    set_clause = ", ".join(f"{quote_identifier(column)} = ?" for column in set_columns)
    return (
        f"UPDATE {quote_identifier(table)} SET {set_clause} "
        f"WHERE {where_clause(key_columns)} RETURNING *"
    )


def build_delete(table: str, key_columns: Sequence[str]) -> str:
    return f"DELETE FROM {quote_identifier(table)} WHERE {where_clause(key_columns)}"
