"""
TypeScript-specific naming utilities.
"""

import re
from typing import Set

from ...core.naming import NameSanitizer, NamingCase


TYPESCRIPT_RESERVED_WORDS = {
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "implements", "interface",
    "let", "package", "private", "protected", "public", "static", "yield",
    "await", "arguments", "eval",
}

# Names referenced inside generated function bodies
FUNCTION_LOCALS = {
    "db", "record", "changes", "columns", "primaryKey", "insertColumns",
    "insertValues", "updateColumns", "updateValues", "setClause", "sql",
    "stmt", "quote", "col", "Database",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_UNSAFE_FILE_CHARS = re.compile(r'[\x00-\x1f<>:"/\\|?*]')


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))


def typescript_type_name(identifier: str) -> str:
    """Interface name for a table: ``user_accounts`` -> ``UserAccounts``."""
    return NameSanitizer().sanitize_name(identifier, NamingCase.PASCAL_CASE)


def typescript_module_name(table_name: str) -> str:
    """File stem for a table's module.

    The table name is kept except for path separators and other characters
    file systems reject, which become ``_``. A leading dot does too, so
    ``../x`` gives ``_._x`` and stays inside the output directory.
    """
    name = _UNSAFE_FILE_CHARS.sub("_", table_name)
    if name.startswith("."):
        name = "_" + name[1:]
    return name or "_"


def typescript_property_name(column_name: str) -> str:
    """Interface property key; quoted when not a plain identifier."""
    if is_identifier(column_name):
        return column_name
    return '"' + column_name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def typescript_parameter_name(column_name: str, taken: Set[str]) -> str:
    """Key parameter name for a column, avoiding keywords and body locals."""
    name = column_name
    if not is_identifier(name):
        name = NameSanitizer().sanitize_name(name, NamingCase.CAMEL_CASE)
    while name in TYPESCRIPT_RESERVED_WORDS or name in FUNCTION_LOCALS or name in taken:
        name = f"{name}_"
    return name
