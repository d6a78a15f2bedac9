"""
sqlite-codegen: typed data-access code from SQLite schemas.

Reads a schema script into an in-memory catalog and emits one record type
plus CRUD functions per table, for Python (``sqlite3``) or TypeScript
(``bun:sqlite``).
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .catalog import SchemaCatalog, SchemaLoadError, read_schema
from .codegen import (
    GenerationResult,
    GeneratorConfig,
    generate_from_tables,
    list_supported_languages,
)
from .emitter import write_result
from .utils import SchemaSourceError, load_schema_text

__version__ = "0.1.0"

ConfigLike = Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]]


def generate_from_schema(
    schema_text: str, language: str = "python", config: ConfigLike = None
) -> GenerationResult:
    """
    Generate code for every table of a schema script.

    Args:
        schema_text: SQL script creating the tables
        language: Target language name or alias
        config: Generator configuration (GeneratorConfig, dict or path)

    Returns:
        GenerationResult with one unit per table and the manifest

    Raises:
        SchemaLoadError: If the script cannot be executed
    """
    tables = read_schema(schema_text)
    return generate_from_tables(tables, language, config)


def generate_files(
    schema_text: str,
    output_dir: Union[str, Path],
    language: str = "python",
    config: ConfigLike = None,
) -> List[Path]:
    """Generate code for a schema script and write it to ``output_dir``."""
    result = generate_from_schema(schema_text, language, config)
    return write_result(result, output_dir)


__all__ = [
    "SchemaCatalog",
    "SchemaLoadError",
    "SchemaSourceError",
    "GenerationResult",
    "GeneratorConfig",
    "generate_from_schema",
    "generate_files",
    "list_supported_languages",
    "load_schema_text",
    "read_schema",
    "write_result",
]
