"""
Language-independent pieces of code generation.

Everything here is shared by the python and typescript generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    GeneratedUnit,
    GenerationResult,
    generate_code,
)
from .schema import Column, Table, SchemaError, column_from_pragma, table_from_pragma
from .types import ColumnType, map_storage_type, base_storage_type
from .naming import NameSanitizer, NamingCase, convert_case, split_words, to_type_name
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Generator base and results
    "CodeGenerator",
    "GeneratorError",
    "GeneratedUnit",
    "GenerationResult",
    "generate_code",
    # Table model
    "Column",
    "Table",
    "SchemaError",
    "column_from_pragma",
    "table_from_pragma",
    # Type mapping
    "ColumnType",
    "map_storage_type",
    "base_storage_type",
    # Identifiers
    "NameSanitizer",
    "NamingCase",
    "to_type_name",
    "convert_case",
    "split_words",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
