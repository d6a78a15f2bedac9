"""
Command-line interface for sqlite-codegen.

Reads a schema script, generates code for the chosen language and writes
it to an output directory (or prints it with ``--dry-run``).
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .catalog import SchemaCatalog, SchemaLoadError
from .codegen import (
    ConfigError,
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    RegistryError,
    generate_code,
    get_generator,
    is_language_supported,
    list_all_language_info,
    load_config,
)
from .codegen.core.config import get_config_manager
from .codegen.registry import get_registry
from .emitter import write_result
from .logging_config import configure_logging, get_logger
from .utils import SchemaSourceError, load_schema_text

logger = get_logger(__name__)

console = Console()

SYNTAX_LEXERS = {"python": "python", "typescript": "typescript"}


class CLIError(Exception):
    """A run that cannot proceed with the given options."""

    pass


# Checked in order; OSError last since FileNotFoundError is one
FAILURE_LABELS = (
    ((CLIError, ConfigError, RegistryError, FileNotFoundError), "Error"),
    (SchemaSourceError, "Failed to load schema"),
    (SchemaLoadError, "Invalid schema"),
    (GeneratorError, "Code generation failed"),
    (OSError, "Failed to write output"),
)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sqlite-codegen",
        description="Generate typed data-access code from a SQLite schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sqlite-codegen --schema-file schema.sql --output-dir generated
  sqlite-codegen --schema-file schema.sql --output-dir src/db -l typescript
  sqlite-codegen --schema-url https://example.com/schema.sql --dry-run
  sqlite-codegen --list-languages
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument(
        "--schema-file", metavar="PATH", help="SQL script defining the schema"
    )
    input_group.add_argument(
        "--schema-url", metavar="URL", help="URL to fetch the SQL script from"
    )

    parser.add_argument(
        "--output-dir", metavar="PATH", help="Directory to write generated files to"
    )
    parser.add_argument(
        "--language",
        "-l",
        default="python",
        help="Target language (default: python)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")

    # Common options
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )
    parser.add_argument(
        "--no-manifest",
        action="store_true",
        help="Don't generate the module that re-exports every table",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated code instead of writing files",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging and show generation metadata",
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the command line.

    Args:
        argv: Arguments, defaulting to ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, 1 for failure). Usage errors exit with 2.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)

    if args.list_languages:
        return _list_languages()

    if not (args.schema_file or args.schema_url):
        parser.error("one of --schema-file or --schema-url is required")

    if not (args.output_dir or args.dry_run):
        parser.error("--output-dir is required unless --dry-run is given")

    try:
        config = _build_config(args)
        generator = get_generator(args.language, config)
        return _generate_and_output(generator, args)

    except (
        CLIError,
        ConfigError,
        RegistryError,
        SchemaSourceError,
        SchemaLoadError,
        GeneratorError,
        OSError,
    ) as e:
        label = next(text for kinds, text in FAILURE_LABELS if isinstance(e, kinds))
        console.print(f"[red]✗ {label}:[/red] {e}")
        return 1


def _list_languages() -> int:
    """Print the registered languages as a table."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    for heading, style in (
        ("Language", "bold green"),
        ("Extension", "cyan"),
        ("Manifest", "cyan"),
        ("Generates", "dim"),
        ("Aliases", "blue"),
    ):
        table.add_column(heading, style=style, no_wrap=heading == "Language")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) or "[dim]none[/dim]"
        table.add_row(
            f"🔧 {name}",
            info["file_extension"],
            info["manifest"],
            info["description"],
            aliases,
        )

    console.print()
    console.print(table)
    console.print()

    console.print(
        Panel(
            "[bold]Usage:[/bold] sqlite-codegen --schema-file [dim]schema.sql[/dim] "
            "--output-dir [dim]out[/dim] --language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    config_dict: dict[str, Any] = {}

    if args.no_comments:
        config_dict["add_comments"] = False

    if args.no_manifest:
        config_dict["generate_manifest"] = False

    if not is_language_supported(args.language):
        raise CLIError(
            f"Unsupported language '{args.language}'; see --list-languages"
        )

    language = get_registry().resolve(args.language)
    return load_config(language, custom_config=config_dict, config_file=args.config)


def _load_tables(args: argparse.Namespace):
    source, schema_text = load_schema_text(
        file_path=args.schema_file, url=args.schema_url
    )
    logger.debug("Schema source: %s", source)

    with SchemaCatalog.load(schema_text) as catalog:
        return catalog.read_tables()


def _generate_and_output(generator, args: argparse.Namespace) -> int:
    """Generate code and handle output with rich formatting."""
    config_warnings = get_config_manager().validate_config(
        generator.config, generator.language_name
    )
    if config_warnings:
        raise CLIError("; ".join(config_warnings))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        step = progress.add_task("[cyan]Reading schema...", total=None)
        tables = _load_tables(args)
        progress.update(
            step, description=f"[green]Generating {generator.language_name} code..."
        )
        result = generate_code(generator, tables)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if not tables:
        console.print("[yellow]⚠️  Schema defines no tables[/yellow]")

    if args.dry_run:
        _print_result(result, generator.language_name)
    else:
        written = write_result(result, args.output_dir)
        console.print(
            f"[green]✓[/green] Wrote {len(written)} {generator.language_name} "
            f"file(s) to [cyan]{args.output_dir}[/cyan]"
        )

    if args.verbose and result.metadata:
        _print_metadata(result)

    if result.warnings:
        console.print(f"\n[yellow]⚠️  {len(result.warnings)} warning(s):[/yellow]")
        console.print("\n".join(f"  [yellow]•[/yellow] {w}" for w in result.warnings))
        console.print()

    return 0


def _print_result(result: GenerationResult, language: str):
    """Display every generated unit with syntax highlighting."""
    lexer = SYNTAX_LEXERS.get(language, "text")
    for unit in result.files:
        console.print(f"\n[green]📄 {unit.file_name}[/green]")
        console.print(Syntax(unit.code, lexer, theme="monokai"))


def _print_metadata(result: GenerationResult):
    details = Table(title="📊 Run Details", box=box.SIMPLE, header_style="bold cyan")
    details.add_column("Detail", style="bold")
    details.add_column("Value", style="green")

    for key, value in result.metadata.items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        details.add_row(key.replace("_", " ").capitalize(), str(value))

    console.print()
    console.print(details)
