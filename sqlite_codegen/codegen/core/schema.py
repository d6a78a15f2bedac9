"""
Core schema representation for code generation.

Converts SQLite catalog metadata into a normalized, read-only table model
that every language generator works from.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .types import ColumnType, map_storage_type


class SchemaError(Exception):
    """Raised when catalog metadata cannot form a consistent table model."""

    pass


@dataclass(frozen=True)
class Column:
    """A single declared column."""

    position: int
    name: str
    storage_type: str
    not_null: bool = False
    # Carried from the catalog but not consumed by any generator.
    default_value: Optional[str] = None
    primary_key_ordinal: int = 0
    # GENERATED ALWAYS AS columns are read back but never written
    generated: bool = False

    @property
    def is_primary_key(self) -> bool:
        return self.primary_key_ordinal > 0

    @property
    def nullable(self) -> bool:
        """Primary key columns never hold NULL, whatever the constraint says."""
        return not (self.not_null or self.is_primary_key)

    @property
    def column_type(self) -> ColumnType:
        return map_storage_type(self.storage_type)


@dataclass(frozen=True)
class Table:
    """A base table and its columns in declaration order."""

    name: str
    columns: Tuple[Column, ...] = field(default_factory=tuple)

    def __post_init__(self):
        ordered = tuple(sorted(self.columns, key=lambda c: c.position))
        object.__setattr__(self, "columns", ordered)

        positions = [c.position for c in ordered]
        if positions != list(range(len(ordered))):
            raise SchemaError(
                f"Table '{self.name}' has non-contiguous column positions: {positions}"
            )

        names = [c.name for c in ordered]
        if len(set(names)) != len(names):
            raise SchemaError(f"Table '{self.name}' has duplicate column names")

    @property
    def primary_key(self) -> Tuple[Column, ...]:
        """Key columns ordered by their position inside the key."""
        key_columns = [c for c in self.columns if c.is_primary_key]
        return tuple(sorted(key_columns, key=lambda c: c.primary_key_ordinal))

    @property
    def has_primary_key(self) -> bool:
        return bool(self.primary_key)

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def writable_columns(self) -> Tuple[Column, ...]:
        """Columns an INSERT or UPDATE may set, in position order."""
        return tuple(c for c in self.columns if not c.generated)


# ``hidden`` values reported by PRAGMA table_xinfo
HIDDEN_COLUMN = 1
GENERATED_COLUMNS = (2, 3)  # VIRTUAL, STORED


def column_from_pragma(row: Sequence[Any], position: Optional[int] = None) -> Column:
    """
    Build a Column from one ``PRAGMA table_info`` or ``table_xinfo`` row.

    Args:
        row: ``(cid, name, type, notnull, dflt_value, pk[, hidden])``
        position: Position to use instead of ``cid``

    Returns:
        Column: normalized column
    """
    cid, name, declared_type, notnull, default_value, pk = row[:6]
    hidden = row[6] if len(row) > 6 else 0
    return Column(
        position=int(cid) if position is None else position,
        name=name,
        storage_type=declared_type or "",
        not_null=bool(notnull),
        default_value=default_value,
        primary_key_ordinal=int(pk),
        generated=hidden in GENERATED_COLUMNS,
    )


def table_from_pragma(name: str, rows: Iterable[Sequence[Any]]) -> Table:
    """
    Build a Table from its ``PRAGMA table_xinfo`` rows.

    Hidden columns are dropped, so positions match the columns ``SELECT *``
    and ``RETURNING *`` produce. Generated columns are kept.
    """
    visible = [
        row
        for row in sorted(rows, key=lambda r: r[0])
        if len(row) <= 6 or row[6] != HIDDEN_COLUMN
    ]
    return Table(
        name=name,
        columns=tuple(column_from_pragma(row, position) for position, row in enumerate(visible)),
    )
