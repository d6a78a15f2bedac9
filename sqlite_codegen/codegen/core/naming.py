"""
Identifier transforms shared by every target language.

Table names become type names through :func:`to_type_name`; column and
table names become target-language identifiers through
:class:`NameSanitizer`, which also keeps them unique within a scope.
"""

import re
from enum import Enum
from typing import Dict, Iterable, List, Set, Tuple


class NamingCase(Enum):
    """Identifier case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

FALLBACK_NAME = "field"


def to_type_name(identifier: str) -> str:
    """
    Convert a table or column identifier to its type name.

    Splits on ``_``, capitalizes the first letter of every fragment and
    lowercases the rest: ``user_accounts`` -> ``UserAccounts``,
    ``USERS`` -> ``Users``. Empty fragments contribute nothing. Distinct
    identifiers may map to the same name; callers decide what to do about it.
    """
    return "".join(
        fragment[:1].upper() + fragment[1:].lower()
        for fragment in identifier.split("_")
        if fragment
    )


def split_words(identifier: str) -> List[str]:
    """Lowercased words of an identifier.

    ``userName``, ``user name`` and ``USER_NAME`` all give ``["user", "name"]``.
    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1_\2", _INVALID_CHARS.sub("_", identifier))
    return [word.lower() for word in spaced.split("_") if word]


def convert_case(identifier: str, case: NamingCase) -> str:
    """Render ``identifier`` as a valid identifier in ``case``.

    Names that would start with a digit get a leading underscore; names with
    no usable characters become ``field``.
    """
    if case == NamingCase.PASCAL_CASE:
        name = to_type_name(_INVALID_CHARS.sub("_", identifier)) or FALLBACK_NAME.title()
    else:
        words = split_words(identifier) or [FALLBACK_NAME]
        if case == NamingCase.CAMEL_CASE:
            name = words[0] + "".join(word.capitalize() for word in words[1:])
        else:
            name = "_".join(words)

    if name[0].isdigit():
        name = f"_{name}"
    return name


class NameSanitizer:
    """Hands out unique, reserved-word-safe identifiers within one scope.

    The same input name and case always gets the same answer until
    :meth:`reset_used_names` starts a new scope.
    """

    def __init__(self, reserved_words: Iterable[str] = ()):
        self.reserved_words = frozenset(reserved_words)
        self._assigned: Dict[Tuple[str, NamingCase, str], str] = {}
        self._taken: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.SNAKE_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Identifier for ``name`` in ``target_case``.

        Reserved words get ``suffix_on_conflict`` appended; names already
        handed out in this scope are numbered ``name_1``, ``name_2`` and so on.
        """
        key = (name, target_case, suffix_on_conflict)
        if key not in self._assigned:
            candidate = convert_case(name, target_case)
            if candidate in self.reserved_words:
                candidate += suffix_on_conflict
            self._assigned[key] = self._claim(candidate)
        return self._assigned[key]

    def _claim(self, candidate: str) -> str:
        name = candidate
        counter = 1
        while name in self._taken:
            name = f"{candidate}_{counter}"
            counter += 1
        self._taken.add(name)
        return name

    def reset_used_names(self):
        """Start a new scope."""
        self._assigned.clear()
        self._taken.clear()

    def add_used_name(self, name: str):
        """Mark ``name`` as taken without assigning it."""
        self._taken.add(name)
