"""
Python code generator module.

Generates dataclasses and sqlite3 CRUD functions from SQLite tables.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import create_python_sanitizer
from .config import PythonConfig, PYTHON_TYPE_MAP

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "create_python_sanitizer",
    # Configuration
    "PythonConfig",
    "PYTHON_TYPE_MAP",
]
