"""
Command line interface for schemagen.

Wraps the build controller: one ``generate`` command, plus ``kinds`` to
show the generators that will run.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .controller import CodegenController
from .core.config import load_config
from .core.exceptions import CodegenError, ConfigError
from .logging_config import get_logger, setup_logging
from .registry import get_registry

logger = get_logger(__name__)

# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schemagen",
        description="Generate typed Python modules from a GraphQL introspection schema.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate code from a schema")
    generate.add_argument("--schema", "-s", metavar="PATH", help="Introspection JSON file")
    generate.add_argument("--output", "-o", metavar="DIR", help="Output source root")
    generate.add_argument(
        "--package", "-p", metavar="NAME", help="Base package of the generated code"
    )
    generate.add_argument(
        "--scalar",
        action="append",
        default=[],
        metavar="NAME=TYPE",
        help="Map a custom scalar to a dotted Python type (repeatable)",
    )
    generate.add_argument("--config", "-c", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--no-skip",
        action="store_true",
        help="Regenerate even if the schema is unchanged",
    )
    generate.add_argument(
        "--no-comments",
        action="store_true",
        help="Omit descriptions and the generated-file header",
    )
    generate.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers.add_parser("kinds", help="List the generators in execution order")

    return parser


def parse_scalar_mappings(values: List[str]) -> Dict[str, str]:
    """Turn ``Name=dotted.Type`` strings into a mapping."""
    mappings = {}
    for value in values:
        name, sep, identifier = value.partition("=")
        if not sep or not name.strip() or not identifier.strip():
            raise ConfigError(f"Invalid scalar mapping '{value}', expected NAME=TYPE")
        mappings[name.strip()] = identifier.strip()
    return mappings


def _handle_generate(args: argparse.Namespace) -> int:
    overrides = {
        "schema_path": args.schema,
        "output_dir": args.output,
        "namespace": args.package,
    }
    if args.no_skip:
        overrides["skip_if_up_to_date"] = False
    if args.no_comments:
        overrides["add_comments"] = False

    config = load_config(custom_config=overrides, config_file=args.config)
    if args.scalar:
        config.scalar_mappings = {
            **config.scalar_mappings,
            **parse_scalar_mappings(args.scalar),
        }

    result = CodegenController(config).run()

    summary = Table(box=box.SIMPLE, show_header=False)
    summary.add_column("Setting", style="bold")
    summary.add_column("Value")
    summary.add_row("Schema", escape(str(config.schema_path)))
    summary.add_row("Output", escape(str(config.output_dir)))
    summary.add_row("Package", config.namespace)

    if result.is_skipped:
        summary.add_row("Status", "[yellow]skipped[/yellow] (schema unchanged)")
        border = "yellow"
    else:
        summary.add_row("Status", "[green]generated[/green]")
        summary.add_row("Artifacts", str(result.artifact_count))
        border = "green"

    console.print(Panel(summary, title="schemagen", border_style=border))
    return 0


def _handle_kinds() -> int:
    table = Table(title="Generators", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="bold green")
    table.add_column("Generator Class", style="dim")

    registry = get_registry()
    for index, kind in enumerate(registry.list_kinds(), start=1):
        table.add_row(str(index), kind, registry.get_generator_class(kind).__name__)

    console.print(table)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point.

    Returns:
        Exit code: 0 when generated or skipped, 1 on any generation error
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING)

    if args.command == "kinds":
        return _handle_kinds()

    try:
        return _handle_generate(args)
    except CodegenError as e:
        logger.debug("Generation failed", exc_info=True)
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
