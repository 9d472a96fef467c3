"""
Command-line interface.

Provides the ``autocodable`` command: ``generate`` codecs from declaration
JSON, list the registered ``languages`` and show generator ``info``.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import GeneratorError, generate_code, get_generator
from .codegen.core.config import ConfigError, load_config
from .codegen.core.extractor import extract_all
from .codegen.registry import (
    RegistryError,
    get_language_info,
    get_registry,
    list_all_language_info,
)
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_declarations, parse_declarations

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich consoles
console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="autocodable",
        description="Generate encode/decode routines from coding-key declarations",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")
    _add_generate_parser(subparsers)

    languages_parser = subparsers.add_parser("languages", help="List supported languages")
    languages_parser.set_defaults(func=_handle_languages)

    info_parser = subparsers.add_parser("info", help="Show details about a language")
    info_parser.add_argument("language", help="Language name or alias")
    info_parser.set_defaults(func=_handle_info)

    return parser


def _add_generate_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "generate",
        help="Generate codecs from declaration JSON",
        description="Generate encode/decode routines from declaration JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autocodable generate -l python user.json
  autocodable generate -l swift --access-control public -o User+Codable.swift user.json
  autocodable generate -l py --type-module myapp.models --stdin < decls.json
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("file", nargs="?", help="Declaration JSON file")
    input_group.add_argument("--url", help="URL to fetch declaration JSON from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read declaration JSON from standard input"
    )

    parser.add_argument(
        "--language", "-l", required=True, help="Target language for code generation"
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Write bare code to stdout, without highlighting",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )

    # Coding options, applied over each declaration's own options
    options_group = parser.add_argument_group("coding options")
    options_group.add_argument(
        "--access-control",
        choices=["internal", "public"],
        help="Visibility of the generated procedures",
    )
    options_group.add_argument(
        "--container",
        help='Container strategy: keyed, single_value_for_enum or "single_value(name)"',
    )
    options_group.add_argument(
        "--directions",
        choices=["both", "encode", "decode"],
        help="Which procedures to generate (default: both)",
    )

    # Common options
    common_group = parser.add_argument_group("common generation options")
    common_group.add_argument(
        "--no-comments", action="store_true", help="Don't add the header comment"
    )
    common_group.add_argument("--indent-size", type=int, help="Indentation width")

    # Python-specific options
    python_group = parser.add_argument_group("Python-specific options")
    python_group.add_argument(
        "--runtime-module", help="Module the runtime containers are imported from"
    )
    python_group.add_argument(
        "--type-module", help="Module the codable and adapter types are imported from"
    )
    python_group.add_argument(
        "--no-register",
        action="store_true",
        help="Don't emit register_codec calls",
    )

    parser.set_defaults(func=_handle_generate)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point of the ``autocodable`` command.

    Args:
        argv: Arguments without the program name (default: ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        _status_console(args).print(f"[red]✗ Error:[/red] {e}")
        return 1


def _status_console(args: argparse.Namespace) -> Console:
    """Console for messages; stderr when stdout carries bare code."""
    return err_console if getattr(args, "plain", False) else console


def _handle_languages(args: argparse.Namespace) -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(lang_name, info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] autocodable generate -l [cyan]LANGUAGE[/cyan] [dim]decls.json[/dim]\n"
            "[bold]Info:[/bold] autocodable info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _handle_info(args: argparse.Namespace) -> int:
    """Show detailed information about a specific language."""
    try:
        info = get_language_info(args.language)
    except RegistryError as e:
        console.print(f"[red]✗ {e}[/red]")
        console.print("[dim]Use 'autocodable languages' to see available options[/dim]")
        return 1

    info_text = (
        f"[bold]Language:[/bold] {info['name']}\n"
        f"[bold]File Extension:[/bold] {info['file_extension']}\n"
        f"[bold]Generator Class:[/bold] {info['class']}\n"
        f"[bold]Module:[/bold] {info['module']}\n"
        f"[bold]Nested Containers:[/bold] {info['container_style']} case\n"
        f"[bold]Templates:[/bold] {len(info['templates'])}"
    )
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    for key, value in sorted(info["default_config"].items()):
        config_table.add_row(key, json.dumps(value))

    console.print()
    console.print(config_table)
    return 0


def _load_input(args: argparse.Namespace):
    """Read raw declarations from the selected input source."""
    try:
        if args.file:
            return load_declarations(file_path=args.file)[1]
        if args.url:
            return load_declarations(url=args.url)[1]
        return parse_declarations(json.load(sys.stdin), "<stdin>")
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON input: {e}") from e
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace, language: str):
    """Build the generator configuration from the config file and CLI flags."""
    config_dict: Dict[str, Any] = {}
    language_config: Dict[str, Any] = {}

    if args.no_comments:
        config_dict["add_comments"] = False
    if args.indent_size is not None:
        config_dict["indent_size"] = args.indent_size

    if language == "python":
        if args.runtime_module:
            language_config["runtime_module"] = args.runtime_module
        if args.type_module:
            language_config["type_module"] = args.type_module
        if args.no_register:
            language_config["register_codecs"] = False

    if language_config:
        config_dict["language_config"] = language_config

    try:
        return load_config(language, custom_config=config_dict, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _coding_options(args: argparse.Namespace) -> Dict[str, Any]:
    options = {
        "access_control": args.access_control,
        "container": args.container,
        "directions": args.directions,
    }
    return {key: value for key, value in options.items() if value is not None}


def _handle_generate(args: argparse.Namespace) -> int:
    """Generate code and handle output with rich formatting."""
    ui = _status_console(args)

    try:
        language = get_registry().resolve(args.language)
        generator = get_generator(language, _build_config(args, language))
    except RegistryError as e:
        ui.print(f"[red]✗ {e}[/red]")
        return 1

    declarations = _load_input(args)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=ui,
        transient=True,
    ) as progress:
        extract_task = progress.add_task("[cyan]Extracting schemas...", total=None)
        try:
            types = extract_all(declarations, _coding_options(args))
        except GeneratorError as e:
            ui.print(f"[red]✗ Invalid declaration:[/red] {e}")
            return 1
        progress.remove_task(extract_task)

        gen_task = progress.add_task(
            f"[green]Generating {generator.language_name} code...", total=None
        )
        result = generate_code(generator, types)
        progress.remove_task(gen_task)

    if not result.success:
        ui.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            ui.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        ui.print(
            f"[green]✓[/green] Generated {generator.language_name} code saved to "
            f"[cyan]{output_path}[/cyan]"
        )
    elif args.plain:
        sys.stdout.write(result.code)
    else:
        console.print(Syntax(result.code, generator.language_name, theme="monokai"))

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        ui.print()
        ui.print(metadata_table)

    if result.warnings:
        ui.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            ui.print(f"  [yellow]•[/yellow] {warning}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
