"""
Python-specific configuration and type mappings.
"""

from ...core.types import ColumnType


# Python type mappings; SQLite integers are unbounded Python ints
PYTHON_TYPE_MAP = {
    ColumnType.INTEGER: "int",
    ColumnType.REAL: "float",
    ColumnType.TEXT: "str",
    ColumnType.BLOB: "bytes",
    ColumnType.BOOLEAN: "int",
    ColumnType.TIMESTAMP: "str",
    ColumnType.UNKNOWN: "Any",
}


class PythonConfig:
    """Python-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Python configuration."""
        # Dataclass options
        self.dataclass_slots = kwargs.get("dataclass_slots", True)
        self.dataclass_frozen = kwargs.get("dataclass_frozen", False)

        # Types
        self.unknown_type = kwargs.get("unknown_type", "Any")

        # Module generated code imports UNSET and the SQL builders from
        self.runtime_module = kwargs.get("runtime_module", "sqlite_codegen.runtime")

        # Additional import lines, e.g. for types named in type_overrides
        self.extra_imports = list(kwargs.get("extra_imports", []))

        self.type_map = PYTHON_TYPE_MAP.copy()
        self.type_map[ColumnType.UNKNOWN] = self.unknown_type

    def dataclass_decorator(self) -> str:
        """Render the ``@dataclass`` decorator line."""
        options = []
        if self.dataclass_frozen:
            options.append("frozen=True")
        if self.dataclass_slots:
            options.append("slots=True")

        if not options:
            return "@dataclass"
        return f"@dataclass({', '.join(options)})"

    def get_imports(self, has_primary_key: bool) -> list[str]:
        """Import lines for one generated table module."""
        runtime_names = ["UNSET", "Unset", "build_insert"]
        if has_primary_key:
            runtime_names.append("build_update")

        imports = [
            "import sqlite3",
            "from dataclasses import dataclass",
            "from typing import Any, Sequence",
            "",
            f"from {self.runtime_module} import {', '.join(runtime_names)}",
        ]
        if self.extra_imports:
            imports.append("")
            imports.extend(self.extra_imports)
        return imports
