"""
Language-independent half of code generation.

A :class:`CodeGenerator` subclass knows one target language: its type
map, its naming rules and its templates. The shared pieces live here:
type resolution with overrides, schema checks and name collision policy,
output tidying, and :func:`generate_code`, which turns a generator and a
table list into a :class:`GenerationResult`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Any, Callable, Iterable, Optional, Sequence
from pathlib import Path

from .config import GeneratorConfig
from .naming import to_type_name
from .schema import Column, Table
from .templates import TemplateEngine, create_template_engine
from .types import ColumnType, base_storage_type, map_storage_type
from ...logging_config import get_logger

logger = get_logger(__name__)

MAX_BLANK_LINES = 2


class GeneratorError(Exception):
    """Raised when a schema cannot be turned into code."""

    pass


@dataclass(frozen=True)
class GeneratedUnit:
    """One generated source file."""

    name: str  # table name, or the manifest file name
    file_name: str
    code: str


class CodeGenerator(ABC):
    """Base class of the per-language generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.language_config: Dict[str, Any] = dict(self.config.language_config)
        self._type_overrides = {
            key.upper(): value for key, value in self.config.type_overrides.items()
        }
        self.template_engine: TemplateEngine = create_template_engine(
            self.get_template_directory()
        )

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Primary registry name, e.g. ``python``."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of table units, dot included."""

    @property
    @abstractmethod
    def manifest_file_name(self) -> str:
        """File name of the unit that re-exports every table unit."""

    @property
    @abstractmethod
    def type_map(self) -> Dict[ColumnType, str]:
        """Target type for each storage kind."""

    @property
    @abstractmethod
    def null_type(self) -> str:
        """Spelling of the absent value in a type union."""

    def get_template_directory(self) -> Optional[Path]:
        """Where this language's ``.j2`` files live; None means no templates."""
        return None

    def reset(self):
        """Clear per-run state before a new generation pass."""

    def generate(self, tables: Sequence[Table]) -> Dict[str, str]:
        """Source for every table, keyed by table name in catalog order."""
        self.reset()
        units = {}
        for table in tables:
            units[table.name] = self.generate_single_table(table)
            logger.debug("Generated %s unit for table %s", self.language_name, table.name)
        return units

    @abstractmethod
    def generate_single_table(self, table: Table) -> str:
        """Generate the record type and CRUD functions for one table."""

    @abstractmethod
    def generate_manifest(self, tables: Sequence[Table]) -> str:
        """Generate the unit that re-exports every table unit."""

    def unit_name(self, table: Table) -> str:
        """Base name of the table's unit, without extension."""
        return table.name

    def unit_file_name(self, table: Table) -> str:
        return f"{self.unit_name(table)}{self.file_extension}"

    def type_name(self, table: Table) -> str:
        """Name of the record type generated for ``table``."""
        return to_type_name(table.name)

    def exported_names(self, table: Table) -> List[str]:
        """Names the table's unit exports through the manifest, type name aside."""
        return []

    def map_type(self, storage_type: str) -> str:
        """Non-null target type for a declared type; overrides win over the map."""
        base = base_storage_type(storage_type)
        if base in self._type_overrides:
            return self._type_overrides[base]
        column_type = map_storage_type(storage_type)
        return self.type_map.get(column_type, self.type_map[ColumnType.UNKNOWN])

    def field_type(self, column: Column) -> str:
        """Target type of a record field, nullable unless NOT NULL or key."""
        target = self.map_type(column.storage_type)
        if column.nullable:
            return f"{target} | {self.null_type}"
        return target

    def validate_tables(self, tables: Sequence[Table]) -> List[str]:
        """
        Collect warnings about ``tables``.

        Tables without a primary key and declared types with no mapping are
        reported, as are tables whose type names, file names or exported
        names coincide. Exported names only matter with a manifest.

        Raises:
            GeneratorError: On a name collision when ``on_name_collision`` is
                ``"error"``.
        """
        warnings = []

        for table in tables:
            if not table.has_primary_key:
                warnings.append(
                    f"Table '{table.name}' has no primary key - "
                    "get/update/delete will not be generated"
                )

            warnings.extend(
                f"Unknown type '{column.storage_type}' in {table.name}.{column.name}"
                for column in table.columns
                if column.column_type == ColumnType.UNKNOWN
                and base_storage_type(column.storage_type) not in self._type_overrides
            )

        warnings.extend(
            self._check_collisions(tables, lambda t: [self.type_name(t)], "type name")
        )
        warnings.extend(
            self._check_collisions(
                tables, lambda t: [self.unit_file_name(t).lower()], "file name"
            )
        )
        if self.config.generate_manifest:
            warnings.extend(
                self._check_collisions(tables, self.exported_names, "exported name")
            )
        return warnings

    def _check_collisions(
        self,
        tables: Sequence[Table],
        derive: Callable[[Table], Iterable[str]],
        what: str,
    ) -> List[str]:
        owners: Dict[str, str] = {}
        warnings = []

        for table in tables:
            for derived in derive(table):
                previous = owners.get(derived)
                if previous is not None and previous != table.name:
                    message = (
                        f"Tables '{previous}' and '{table.name}' share the {what} "
                        f"'{derived}'; '{table.name}' will shadow '{previous}'"
                    )
                    if self.config.on_name_collision == "error":
                        raise GeneratorError(message)
                    logger.warning(message)
                    warnings.append(message)
                owners[derived] = table.name

        return warnings

    def format_code(self, code: str) -> str:
        """
        Tidy rendered output.

        Trailing whitespace goes, runs of blank lines shrink to two, and the
        file ends with exactly one newline.
        """
        lines: List[str] = []
        blanks = 0

        for line in code.split("\n"):
            line = line.rstrip()
            blanks = blanks + 1 if not line else 0
            if blanks <= MAX_BLANK_LINES:
                lines.append(line)

        return "\n".join(lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)


@dataclass
class GenerationResult:
    """Everything one generation run produced.

    ``units`` maps table names to their units in catalog order. A failed
    run has ``success`` False, an ``error_message`` and no units.
    """

    units: Dict[str, GeneratedUnit] = field(default_factory=dict)
    manifest: Optional[GeneratedUnit] = None
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None
    exception: Optional[Exception] = None

    @property
    def files(self) -> List[GeneratedUnit]:
        """Every unit to write, table units first, then the manifest."""
        files = list(self.units.values())
        if self.manifest is not None:
            files.append(self.manifest)
        return files

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        return cls(success=False, error_message=message, exception=exception)


def _describe_run(generator: CodeGenerator, tables: Sequence[Table]) -> Dict[str, Any]:
    return {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "table_count": len(tables),
        "tables_without_primary_key": [
            table.name for table in tables if not table.has_primary_key
        ],
        "has_unknown_types": any(
            column.column_type == ColumnType.UNKNOWN
            for table in tables
            for column in table.columns
        ),
    }


def generate_code(generator: CodeGenerator, tables: Sequence[Table]) -> GenerationResult:
    """
    Run ``generator`` over ``tables``.

    Never raises: any failure, a name collision under the ``error`` policy
    included, comes back as a failed GenerationResult.
    """
    try:
        warnings = generator.validate_tables(tables)

        sources = generator.generate(tables)
        units = {
            table.name: GeneratedUnit(
                name=table.name,
                file_name=generator.unit_file_name(table),
                code=generator.format_code(sources[table.name]),
            )
            for table in tables
        }

        manifest = None
        if generator.config.generate_manifest:
            manifest = GeneratedUnit(
                name=generator.manifest_file_name,
                file_name=generator.manifest_file_name,
                code=generator.format_code(generator.generate_manifest(tables)),
            )

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    logger.info(
        "Generated %d %s unit(s) with %d warning(s)",
        len(units),
        generator.language_name,
        len(warnings),
    )
    return GenerationResult(units, manifest, warnings, _describe_run(generator, tables))
