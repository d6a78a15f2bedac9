"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and the names generated modules use
internally, so table and column names never shadow them.
"""

from typing import Iterable, Set

from ...core.naming import NameSanitizer, NamingCase


# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Methods defined on generated record classes
RECORD_METHODS = {"from_row", "assigned"}

# Names referenced inside generated function bodies
FUNCTION_LOCALS = {
    "conn",
    "record",
    "changes",
    "assigned",
    "sql",
    "row",
    "rows",
    "column",
    "value",
    "build_insert",
    "build_update",
    "sqlite3",
    "TABLE_NAME",
    "PRIMARY_KEY",
    "SELECT_ALL_SQL",
    "SELECT_BY_KEY_SQL",
    "DELETE_SQL",
}

# Module-level names of a generated table module; record classes must not rebind them
MODULE_GLOBALS = {
    "annotations",
    "sqlite3",
    "dataclass",
    "Any",
    "Sequence",
    "UNSET",
    "Unset",
    "build_insert",
    "build_update",
    "TABLE_NAME",
    "COLUMNS",
    "PRIMARY_KEY",
    "SELECT_ALL_SQL",
    "SELECT_BY_KEY_SQL",
    "DELETE_SQL",
}


def create_python_sanitizer(reserved: Iterable[str] = ()) -> NameSanitizer:
    """Create a name sanitizer for field names, with extra taken names."""
    sanitizer = NameSanitizer(PYTHON_RESERVED_WORDS)
    for name in reserved:
        sanitizer.add_used_name(name)
    return sanitizer


def _escape_keyword(name: str) -> str:
    return f"{name}_" if name in PYTHON_RESERVED_WORDS else name


def python_module_name(identifier: str) -> str:
    """snake_case module name for a table: ``UserAccounts`` -> ``user_accounts``."""
    sanitizer = NameSanitizer()
    return _escape_keyword(sanitizer.sanitize_name(identifier, NamingCase.SNAKE_CASE))


def python_class_name(identifier: str) -> str:
    """Record class name for a table: ``user_accounts`` -> ``UserAccounts``.

    Names the generated module already binds get a trailing ``_``, so a
    table called ``unset`` becomes ``Unset_``.
    """
    sanitizer = NameSanitizer()
    name = _escape_keyword(sanitizer.sanitize_name(identifier, NamingCase.PASCAL_CASE))
    return f"{name}_" if name in MODULE_GLOBALS else name


def python_parameter_name(field_name: str, taken: Set[str]) -> str:
    """Key parameter name for a field, avoiding names used in function bodies."""
    name = field_name
    while name in FUNCTION_LOCALS or name in taken:
        name = f"{name}_"
    return name
