"""
TypeScript code generator implementation.

Generates one ``bun:sqlite`` module per table: an interface plus
insert/getAll/get/update/delete functions.
"""

import json
from typing import Dict, List, Any, Sequence
from pathlib import Path

from ...core.generator import CodeGenerator
from ...core.schema import Table
from ...core.config import GeneratorConfig
from ...core.types import ColumnType
from ....runtime.sql import (
    build_delete,
    build_insert,
    build_select_all,
    build_select_by_key,
    quote_identifier,
    where_clause,
)
from .config import TypeScriptConfig
from .naming import (
    typescript_module_name,
    typescript_parameter_name,
    typescript_property_name,
    typescript_type_name,
)

GENERATED_HEADER = "Generated by sqlite-codegen. Do not edit by hand."


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript interfaces and bun:sqlite CRUD functions."""

    def __init__(self, config: GeneratorConfig = None):
        super().__init__(config)
        self.ts_config = TypeScriptConfig(**self.language_config)

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    @property
    def manifest_file_name(self) -> str:
        return "index.ts"

    @property
    def type_map(self) -> Dict[ColumnType, str]:
        return self.ts_config.type_map

    @property
    def null_type(self) -> str:
        return "null"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def type_name(self, table: Table) -> str:
        return typescript_type_name(table.name)

    def unit_name(self, table: Table) -> str:
        return typescript_module_name(table.name)

    def exported_names(self, table: Table) -> List[str]:
        type_name = self.type_name(table)
        operations = ["insert", "getAll"]
        if table.has_primary_key:
            operations.extend(["get", "update", "delete"])
        return [f"{operation}{type_name}" for operation in operations]

    def generate_single_table(self, table: Table) -> str:
        """Generate the module for one table."""
        type_name = self.type_name(table)
        key_columns = [column.name for column in table.primary_key]

        key_fields = self._generate_key_data(table)

        sql = {
            "select_all": build_select_all(table.name),
            "insert_default": build_insert(table.name, []),
            "insert_prefix": f"INSERT INTO {quote_identifier(table.name)} (",
        }
        if table.has_primary_key:
            sql["select_by_key"] = build_select_by_key(table.name, key_columns)
            sql["delete"] = build_delete(table.name, key_columns)
            sql["update_prefix"] = f"UPDATE {quote_identifier(table.name)} SET "
            sql["update_suffix"] = f" WHERE {where_clause(key_columns)} RETURNING *"

        context = {
            "header": GENERATED_HEADER,
            "add_comments": self.config.add_comments,
            "db_import": self.ts_config.db_import,
            "extra_imports": self.ts_config.extra_imports,
            "table_name": table.name,
            "type_name": type_name,
            "fields": [
                {
                    "property": typescript_property_name(column.name),
                    "type": self.field_type(column),
                }
                for column in table.columns
            ],
            "key_fields": key_fields,
            "key_signature": ", ".join(f"{k['param']}: {k['type']}" for k in key_fields),
            "key_args": ", ".join(k["param"] for k in key_fields),
            "has_primary_key": table.has_primary_key,
            "columns_json": json.dumps([c.name for c in table.writable_columns]),
            "primary_key_json": json.dumps(key_columns),
            "sql": sql,
        }

        return self.render_template("table.ts.j2", context)

    def _generate_key_data(self, table: Table) -> List[Dict[str, Any]]:
        """Key parameters in primary key order."""
        taken = set()
        key_fields = []
        for column in table.primary_key:
            param = typescript_parameter_name(column.name, taken)
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
        """Generate ``index.ts`` re-exporting every table module."""
        context = {
            "header": GENERATED_HEADER,
            "modules": [self.unit_name(table) for table in tables],
        }
        return self.render_template("index.ts.j2", context)


def create_typescript_generator(config: GeneratorConfig = None) -> TypeScriptGenerator:
    """Create a TypeScript generator with the default TypeScript configuration."""
    if config is None:
        from ...core.config import load_config

        config = load_config("typescript")

    return TypeScriptGenerator(config)
