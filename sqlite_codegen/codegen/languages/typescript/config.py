"""
TypeScript-specific configuration and type mappings.
"""

from ...core.types import ColumnType


TYPESCRIPT_TYPE_MAP = {
    ColumnType.INTEGER: "number | bigint",
    ColumnType.REAL: "number",
    ColumnType.TEXT: "string",
    ColumnType.BLOB: "Uint8Array",
    ColumnType.BOOLEAN: "number",
    ColumnType.TIMESTAMP: "string",
    ColumnType.UNKNOWN: "any",
}


class TypeScriptConfig:
    """TypeScript-specific configuration."""

    def __init__(self, **kwargs):
        # Module providing the Database class
        self.db_import = kwargs.get("db_import", "bun:sqlite")

        self.int_type = kwargs.get("int_type", "number | bigint")
        self.unknown_type = kwargs.get("unknown_type", "any")

        # Additional import lines, e.g. for types named in type_overrides
        self.extra_imports = list(kwargs.get("extra_imports", []))

        self.type_map = TYPESCRIPT_TYPE_MAP.copy()
        self.type_map[ColumnType.INTEGER] = self.int_type
        self.type_map[ColumnType.UNKNOWN] = self.unknown_type
