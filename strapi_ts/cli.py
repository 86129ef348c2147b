"""
Command-line interface for strapi-ts.

Reads model folders, generates TypeScript units and writes them to the
output folder.
"""

import argparse
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, run
from .core.config import ConfigError, load_config
from .core.generator import GenerationResult, GeneratorError
from .loader import LoaderError
from .logging_config import get_logger, setup_logging
from .writer import WriteError

logger = get_logger(__name__)

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="strapi-ts",
        description="Generate TypeScript interfaces from content-model definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  strapi-ts -i api/ -g components/ -o types/
  strapi-ts -i api/article/models/article.settings.json -e -o types/
  strapi-ts --config strapi-ts.config.py
        """.strip(),
    )

    input_group = parser.add_argument_group("input/output")
    input_group.add_argument(
        "-i",
        "--input",
        nargs="+",
        action="extend",
        metavar="PATH",
        help="Folders with *.settings.json model files, or model files",
    )
    input_group.add_argument(
        "-g",
        "--components",
        metavar="DIR",
        help="Folder with component definitions",
    )
    input_group.add_argument(
        "-o",
        "--out",
        dest="output",
        metavar="DIR",
        help="Output folder (default: types)",
    )
    input_group.add_argument(
        "--config",
        metavar="FILE",
        help="Configuration file (.json or .py)",
    )

    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "-e",
        "--enum",
        action="store_true",
        default=None,
        help="Emit enums instead of string literal unions",
    )
    output_group.add_argument(
        "-n",
        "--nested",
        action="store_true",
        default=None,
        help="Put each model in a folder of the same name",
    )
    output_group.add_argument(
        "-c",
        "--collection-can-be-undefined",
        action="store_true",
        default=None,
        help="Declare collections and repeatable components as optional",
    )

    misc_group = parser.add_argument_group("diagnostics")
    misc_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $STRAPI_TS_LOG_LEVEL or INFO)",
    )
    misc_group.add_argument("--log-file", metavar="FILE", help="Also log to a file")
    misc_group.add_argument(
        "--verbose",
        action="store_true",
        help="List generated units and warnings",
    )
    misc_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Options given on the command line; unset flags are left out."""
    options = {
        "input": args.input,
        "components": args.components,
        "output": args.output,
        "enum": args.enum,
        "nested": args.nested,
        "collection_can_be_undefined": args.collection_can_be_undefined,
    }
    return {key: value for key, value in options.items() if value is not None}


def _print_summary(result: GenerationResult, output: str) -> None:
    table = Table(
        title=f"Generated units in {escape(output)}",
        box=box.ROUNDED,
        title_style="bold cyan",
    )
    table.add_column("Unit", style="bold green", no_wrap=True)
    table.add_column("Lines", style="cyan", justify="right")

    for unit in result.units:
        table.add_row(escape(unit.filename), str(unit.content.count("\n")))

    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {escape(warning)}[/yellow]")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Args:
        argv: Arguments, defaults to sys.argv

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        config = load_config(custom_config=_cli_overrides(args), config_file=args.config)
        if not config.input:
            console.print("[red]✗[/red] At least one --input is required")
            return 1

        result = run(config)

    except (ConfigError, LoaderError, GeneratorError, WriteError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]✗ Unexpected error:[/red] {escape(str(e))}")
        return 1

    console.print(f"Generated {len(result.model_units)} interfaces.")
    if args.verbose:
        _print_summary(result, config.output)
    return 0
