"""
TypeScript code generator module.

Generates bun:sqlite interfaces and CRUD functions from SQLite tables.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .config import TypeScriptConfig, TYPESCRIPT_TYPE_MAP

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "TypeScriptConfig",
    "TYPESCRIPT_TYPE_MAP",
]
