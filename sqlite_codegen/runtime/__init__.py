"""
Runtime support imported by generated Python data-access modules.

Only the standard library is used here; generated code needs nothing
else at call time.
"""

from .sql import (
    build_delete,
    build_insert,
    build_select_all,
    build_select_by_key,
    build_update,
    count_placeholders,
    quote_identifier,
    where_clause,
)
from .unset import UNSET, Unset

__all__ = [
    "UNSET",
    "Unset",
    "build_delete",
    "build_insert",
    "build_select_all",
    "build_select_by_key",
    "build_update",
    "count_placeholders",
    "quote_identifier",
    "where_clause",
]
