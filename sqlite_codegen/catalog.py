"""Schema catalog reader.

Loads a schema script into a private in-memory SQLite database and reads
back its tables as the normalized model the generators consume.
"""

import sqlite3
from typing import List

from .codegen.core.schema import SchemaError, Table, table_from_pragma
from .logging_config import get_logger
from .runtime.sql import quote_identifier

logger = get_logger(__name__)

TABLES_QUERY = (
    "SELECT name FROM sqlite_master "
    "WHERE type = 'table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'"
)


class SchemaLoadError(SchemaError):
    """Raised when the schema script cannot be executed."""

    pass


class SchemaCatalog:
    """An in-memory catalog holding one loaded schema.

    The catalog owns its connection; use it as a context manager so the
    connection is closed when the run ends::

        with SchemaCatalog.load(schema_text) as catalog:
            tables = catalog.read_tables()
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    @classmethod
    def load(cls, schema_text: str) -> "SchemaCatalog":
        """Execute ``schema_text`` against a fresh, empty database.

        Raises:
            SchemaLoadError: If SQLite rejects any statement in the script.
        """
        connection = sqlite3.connect(":memory:")
        try:
            connection.executescript(schema_text)
        except sqlite3.Error as e:
            connection.close()
            logger.error("Schema failed to load: %s", e)
            raise SchemaLoadError(f"Failed to load schema: {e}") from e

        logger.debug("Schema loaded into in-memory catalog")
        return cls(connection)

    def __enter__(self) -> "SchemaCatalog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise SchemaError("Catalog is closed")
        return self._connection

    def table_names(self) -> List[str]:
        """Base table names in catalog enumeration order."""
        rows = self.connection.execute(TABLES_QUERY).fetchall()
        return [row[0] for row in rows]

    def read_table(self, name: str) -> Table:
        rows = self.connection.execute(
            f"PRAGMA table_xinfo({quote_identifier(name)})"
        ).fetchall()
        table = table_from_pragma(name, rows)
        logger.debug(
            "Read table %s: %d columns, primary key %s",
            name,
            len(table.columns),
            [c.name for c in table.primary_key] or "none",
        )
        return table

    def read_tables(self) -> List[Table]:
        """Every base table, in enumeration order."""
        tables = [self.read_table(name) for name in self.table_names()]
        logger.info("Catalog contains %d table(s)", len(tables))
        return tables


def read_schema(schema_text: str) -> List[Table]:
    """Load ``schema_text`` and return its tables; the catalog is discarded."""
    with SchemaCatalog.load(schema_text) as catalog:
        return catalog.read_tables()
