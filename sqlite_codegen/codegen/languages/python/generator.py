"""
Python code generator implementation.

Generates one module per table holding a record dataclass, a partial
dataclass for inserts and updates, and CRUD functions over ``sqlite3``.
"""

from typing import Dict, List, Any, Sequence
from pathlib import Path

from ...core.generator import CodeGenerator
from ...core.naming import NamingCase
from ...core.schema import Table
from ...core.config import GeneratorConfig
from ...core.types import ColumnType
from ....runtime.sql import build_delete, build_select_all, build_select_by_key
from .config import PythonConfig
from .naming import (
    RECORD_METHODS,
    create_python_sanitizer,
    python_class_name,
    python_module_name,
    python_parameter_name,
)

GENERATED_HEADER = "Generated by sqlite-codegen. Do not edit by hand."


class PythonGenerator(CodeGenerator):
    """Code generator for Python dataclasses and sqlite3 CRUD functions."""

    def __init__(self, config: GeneratorConfig = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        self.python_config = PythonConfig(**self.language_config)
        self.sanitizer = create_python_sanitizer(RECORD_METHODS)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    @property
    def manifest_file_name(self) -> str:
        return "__init__.py"

    @property
    def type_map(self) -> Dict[ColumnType, str]:
        return self.python_config.type_map

    @property
    def null_type(self) -> str:
        return "None"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def reset(self):
        self.sanitizer.reset_used_names()
        for name in RECORD_METHODS:
            self.sanitizer.add_used_name(name)

    def unit_name(self, table: Table) -> str:
        return python_module_name(table.name)

    def type_name(self, table: Table) -> str:
        return python_class_name(table.name)

    def function_names(self, table: Table) -> Dict[str, str]:
        """Names of the CRUD functions generated for ``table``."""
        suffix = self.unit_name(table).rstrip("_")
        return {
            "insert": f"insert_{suffix}",
            "get_all": f"get_all_{suffix}",
            "get": f"get_{suffix}",
            "update": f"update_{suffix}",
            "delete": f"delete_{suffix}",
        }

    def exported_names(self, table: Table) -> List[str]:
        """The partial class and the CRUD functions, as listed in ``__all__``."""
        functions = self.function_names(table)
        names = [f"{self.type_name(table)}Partial", functions["insert"], functions["get_all"]]
        if table.has_primary_key:
            names.extend([functions["get"], functions["update"], functions["delete"]])
        return names

    def generate_single_table(self, table: Table) -> str:
        """Generate the module for one table."""
        self.reset()

        class_name = self.type_name(table)
        functions = self.function_names(table)

        fields = self._generate_field_data(table)
        writable_fields = [f for f in fields if f["writable"]]
        key_fields = self._generate_key_data(table, fields, class_name, functions)

        exports = [class_name, *self.exported_names(table)]

        key_columns = [column.name for column in table.primary_key]
        sql = {"select_all": build_select_all(table.name)}
        if table.has_primary_key:
            sql["select_by_key"] = build_select_by_key(table.name, key_columns)
            sql["delete"] = build_delete(table.name, key_columns)

        context = {
            "header": GENERATED_HEADER,
            "add_comments": self.config.add_comments,
            "table_name": table.name,
            "class_name": class_name,
            "partial_name": f"{class_name}Partial",
            "fields": fields,
            "writable_fields": writable_fields,
            "key_fields": key_fields,
            "key_signature": ", ".join(f"{k['param']}: {k['type']}" for k in key_fields),
            "key_args": ", ".join(k["param"] for k in key_fields),
            "has_primary_key": table.has_primary_key,
            "columns_literal": repr(tuple(table.column_names)),
            "primary_key_literal": repr(tuple(key_columns)),
            "functions": functions,
            "sql": sql,
            "exports": exports,
            "imports": self.python_config.get_imports(table.has_primary_key),
            "dataclass_decorator": self.python_config.dataclass_decorator(),
        }

        return self.render_template("table.py.j2", context)

    def _generate_field_data(self, table: Table) -> List[Dict[str, Any]]:
        """Field data for the record and partial classes, in column order."""
        fields = []
        for column in table.columns:
            field_type = self.field_type(column)
            fields.append(
                {
                    "name": self.sanitizer.sanitize_name(column.name, NamingCase.SNAKE_CASE),
                    "column": column.name,
                    "type": field_type,
                    "partial_type": f"{field_type} | Unset",
                    "writable": not column.generated,
                }
            )
        return fields

    def _generate_key_data(
        self,
        table: Table,
        fields: List[Dict[str, Any]],
        class_name: str,
        functions: Dict[str, str],
    ) -> List[Dict[str, Any]]:
        """Key parameters in primary key order."""
        field_names = {f["column"]: f["name"] for f in fields}
        taken = {class_name, f"{class_name}Partial", *functions.values()}

        key_fields = []
        for column in table.primary_key:
            param = python_parameter_name(field_names[column.name], taken)
            taken.add(param)
            key_fields.append(
                {
                    "param": param,
                    "column": column.name,
                    "type": self.map_type(column.storage_type),
                }
            )
        return key_fields

    def generate_manifest(self, tables: Sequence[Table]) -> str:
        """Generate the package ``__init__`` re-exporting every table module."""
        context = {
            "header": GENERATED_HEADER,
            "add_comments": self.config.add_comments,
            "modules": [self.unit_name(table) for table in tables],
        }
        return self.render_template("manifest.py.j2", context)

    def validate_tables(self, tables: Sequence[Table]) -> List[str]:
        """Validate tables for Python generation."""
        warnings = super().validate_tables(tables)

        for table in tables:
            module = self.unit_name(table)
            if module != table.name:
                warnings.append(f"Table {table.name} generates module {module}")

            self.reset()
            for column in table.columns:
                sanitized = self.sanitizer.sanitize_name(column.name, NamingCase.SNAKE_CASE)
                if sanitized != column.name:
                    warnings.append(
                        f"Column {table.name}.{column.name} renamed to {sanitized}"
                    )

        return warnings


# Factory functions
def create_python_generator(config: GeneratorConfig = None) -> PythonGenerator:
    """Create a Python generator with the default Python configuration."""
    if config is None:
        from ...core.config import load_config

        config = load_config("python")

    return PythonGenerator(config)
