"""
SQLite Code Generation Module

Generates typed record definitions and CRUD functions from SQLite schemas.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    GeneratorError,
    GeneratedUnit,
    GenerationResult,
    generate_code,
)
from .core.schema import Column, Table, SchemaError
from .core.types import ColumnType
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config

# Version info
__version__ = "0.1.0"


# Convenience functions
def generate_from_tables(tables, language="python", config=None):
    """
    Generate code from tables already read out of a catalog.

    Args:
        tables: Tables in catalog order
        language: Target language name or alias
        config: Generator configuration (GeneratorConfig, dict or path)

    Returns:
        GenerationResult with generated units
    """
    generator = get_generator(language, config)
    return generate_code(generator, list(tables))


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GeneratedUnit",
    "GenerationResult",
    "Column",
    "Table",
    "ColumnType",
    "SchemaError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "generate_code",
    "generate_from_tables",
    "get_generator",
    "get_language_info",
    "is_language_supported",
    "list_all_language_info",
    "list_supported_languages",
]
