"""
Storage type classification.

Maps declared SQLite column types onto the small set of scalar kinds
every target language knows how to express.
"""

from enum import Enum


class ColumnType(Enum):
    """Scalar kinds a declared storage type can resolve to."""

    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BLOB = "blob"
    BOOLEAN = "boolean"  # stored as 0/1
    TIMESTAMP = "timestamp"
    UNKNOWN = "unknown"


STORAGE_TYPE_MAP = {
    "INTEGER": ColumnType.INTEGER,
    "REAL": ColumnType.REAL,
    "TEXT": ColumnType.TEXT,
    "BLOB": ColumnType.BLOB,
    "BOOLEAN": ColumnType.BOOLEAN,
    "TIMESTAMP": ColumnType.TIMESTAMP,
}

# Other common spellings of the same storage classes
STORAGE_TYPE_ALIASES = {
    "INT": ColumnType.INTEGER,
    "BIGINT": ColumnType.INTEGER,
    "SMALLINT": ColumnType.INTEGER,
    "TINYINT": ColumnType.INTEGER,
    "DOUBLE": ColumnType.REAL,
    "FLOAT": ColumnType.REAL,
    "VARCHAR": ColumnType.TEXT,
    "CHAR": ColumnType.TEXT,
    "NCHAR": ColumnType.TEXT,
    "NVARCHAR": ColumnType.TEXT,
    "CLOB": ColumnType.TEXT,
    "BOOL": ColumnType.BOOLEAN,
    "DATETIME": ColumnType.TIMESTAMP,
}


def base_storage_type(storage_type: str) -> str:
    """Return the declared type without its ``(...)`` qualifier, uppercased."""
    return (storage_type or "").split("(", 1)[0].strip().upper()


def map_storage_type(storage_type: str) -> ColumnType:
    """
    Classify a declared column type.

    Only the part before the first ``(`` matters, so ``VARCHAR(255)`` and
    ``VARCHAR`` classify the same. Unrecognized types fall back to
    ``ColumnType.UNKNOWN``; this never raises.
    """
    base = base_storage_type(storage_type)
    if base in STORAGE_TYPE_MAP:
        return STORAGE_TYPE_MAP[base]
    return STORAGE_TYPE_ALIASES.get(base, ColumnType.UNKNOWN)
