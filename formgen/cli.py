"""
Command-line interface for formgen.

Subcommands generate the artifacts of a form configuration, validate
submissions against it, print its default values and check it for problems.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen.core.config import CodegenConfig, ConfigError, get_config_manager, load_config
from .codegen.core.generator import ArtifactKind, GeneratorError
from .codegen.react.config import REQUIRED_PACKAGES
from .codegen.registry import RegistryError, get_artifact_info, get_registry
from .compiler import compile_form, generate
from .defaults import form_defaults
from .descriptor import check_form, parse_form
from .errors import FormConfigError, describe_error
from .kinds import collect_warnings
from .logging_config import get_logger, setup_logging
from .samples import SAMPLE_FORM
from .utils import JSONLoaderError, load_source
from .validation import compile_form_schema

logger = get_logger(__name__)

# Syntax lexer per artifact
LEXERS = {
    ArtifactKind.COMPONENT: "tsx",
    ArtifactKind.SCHEMA: "typescript",
    ArtifactKind.TYPES: "typescript",
}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formgen",
        description="Compile declarative form configurations into validation "
        "schemas, default values and React form code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  formgen generate form.json --output-dir src/forms
  formgen generate --sample --artifact schema
  formgen validate form.json submission.json
  formgen defaults form.json
  formgen check form.json
  formgen setup
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    logging_group = parser.add_mutually_exclusive_group()
    logging_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show informational log messages"
    )
    logging_group.add_argument(
        "--quiet", "-q", action="store_true", help="Only show errors in the log"
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write log messages to FILE")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate
    gen = subparsers.add_parser("generate", help="Generate component, schema and types files")
    _add_source_argument(gen, required=False)
    gen.add_argument(
        "--sample", action="store_true", help="Use the built-in sample registration form"
    )
    gen.add_argument(
        "--artifact",
        "-a",
        default="all",
        metavar="KIND",
        help="Artifact to generate: component, schema, types or all (aliases: tsx, zod, ts)",
    )
    gen.add_argument(
        "--output-dir", "-o", metavar="DIR", help="Write files to DIR instead of stdout"
    )
    gen.add_argument("--config", metavar="FILE", help="JSON configuration file for generation")
    gen.add_argument("--indent", type=int, metavar="N", help="Indentation width in spaces")
    gen.add_argument("--tabs", action="store_true", help="Indent with tabs")
    gen.add_argument(
        "--no-comments", action="store_true", help="Don't add header comments to generated code"
    )
    gen.add_argument(
        "--metadata", action="store_true", help="Show generation result metadata"
    )
    _add_permissive_argument(gen)
    gen.set_defaults(func=_cmd_generate)

    # validate
    val = subparsers.add_parser("validate", help="Validate a JSON submission against a form")
    _add_source_argument(val)
    val.add_argument("data", metavar="DATA", help="Submission JSON file, URL, or - for stdin")
    val.add_argument(
        "--show-values", action="store_true", help="Print the cleaned values when valid"
    )
    _add_permissive_argument(val)
    val.set_defaults(func=_cmd_validate)

    # defaults
    dfl = subparsers.add_parser("defaults", help="Print the default values of a form as JSON")
    _add_source_argument(dfl)
    _add_permissive_argument(dfl)
    dfl.set_defaults(func=_cmd_defaults)

    # check
    chk = subparsers.add_parser("check", help="Report problems in a form configuration")
    _add_source_argument(chk)
    chk.add_argument(
        "--strict", action="store_true", help="Exit with an error when any problem is found"
    )
    chk.set_defaults(func=_cmd_check)

    # setup
    setup = subparsers.add_parser("setup", help="List the npm packages the generated code uses")
    setup.set_defaults(func=_cmd_setup)

    # list-artifacts
    lst = subparsers.add_parser("list-artifacts", help="List the artifacts formgen generates")
    lst.set_defaults(func=_cmd_list_artifacts)

    return parser


def _add_source_argument(parser: argparse.ArgumentParser, required: bool = True):
    parser.add_argument(
        "source",
        metavar="CONFIG",
        nargs=None if required else "?",
        help="Form configuration JSON file, URL, or - for stdin",
    )


def _add_permissive_argument(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--permissive",
        action="store_true",
        help="Degrade recoverable configuration errors to warnings",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "INFO" if args.verbose else "ERROR" if args.quiet else None
    setup_logging(level, Path(args.log_file) if args.log_file else None)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except FormConfigError as e:
        console.print(f"[red]✗[/red] {escape(describe_error(e))}")
    except (CLIError, ConfigError, RegistryError, GeneratorError, JSONLoaderError) as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
    except FileNotFoundError as e:
        console.print(f"[red]✗ File not found:[/red] {escape(str(e))}")
    return 1


# Input helpers


def _read_json(source: str) -> Any:
    """Load JSON from a file, an http(s) URL, or stdin (``-``)."""
    if source == "-":
        try:
            return json.load(sys.stdin)
        except json.JSONDecodeError as e:
            raise CLIError(f"Invalid JSON on standard input: {e}") from e
    _, data = load_source(source)
    return data


def _form_data(args: argparse.Namespace) -> Any:
    if getattr(args, "sample", False):
        if args.source:
            raise CLIError("Give either CONFIG or --sample, not both")
        return SAMPLE_FORM
    if not args.source:
        raise CLIError("A form configuration is required (CONFIG or --sample)")
    return _read_json(args.source)


def _build_config(args: argparse.Namespace) -> CodegenConfig:
    """Build configuration from CLI arguments."""
    overrides: Dict[str, Any] = {}
    if getattr(args, "indent", None) is not None:
        if args.indent < 1:
            raise CLIError("--indent must be a positive number")
        overrides["indent_size"] = args.indent
    if getattr(args, "tabs", False):
        overrides["use_tabs"] = True
    if getattr(args, "no_comments", False):
        overrides["add_comments"] = False
    if getattr(args, "permissive", False):
        overrides["strict"] = False

    config = load_config(custom_config=overrides, config_file=getattr(args, "config", None))
    for warning in get_config_manager().validate_config(config):
        logger.warning("Configuration: %s", warning)
    return config


# Commands


def _cmd_generate(args: argparse.Namespace) -> int:
    config = _build_config(args)
    data = _form_data(args)

    if args.artifact.lower() == "all":
        compiled = compile_form(data, config)
        artifacts = list(compiled.artifacts.values())
        warnings = compiled.warnings
        metadata = {"title": compiled.form.title, "files": ", ".join(compiled.files)}
    else:
        kind = get_registry().resolve(args.artifact)
        result = generate(data, kind, config)
        if not result.success:
            raise GeneratorError(result.error_message)
        artifacts = [result.artifact]
        warnings = result.warnings
        metadata = result.metadata

    if args.output_dir:
        _write_artifacts(artifacts, Path(args.output_dir))
    else:
        _print_artifacts(artifacts)

    if args.metadata and metadata:
        _print_metadata(metadata)
    _print_warnings(warnings)
    return 0


def _write_artifacts(artifacts, output_dir: Path) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for artifact in artifacts:
            path = output_dir / artifact.file_name
            path.write_text(artifact.text, encoding="utf-8")
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")
    except OSError as e:
        raise CLIError(f"Failed to write to {output_dir}: {e}") from e


def _print_artifacts(artifacts) -> None:
    if not console.is_terminal:
        # Plain text keeps piped output byte-exact
        for artifact in artifacts:
            if len(artifacts) > 1:
                sys.stdout.write(f"// ---- {artifact.file_name} ----\n")
            sys.stdout.write(artifact.text)
        return

    for artifact in artifacts:
        border = "═" * 30
        console.print(f"[green]{border} 📄 {artifact.file_name} {border}[/green]\n")
        console.print(Syntax(artifact.text, LEXERS[artifact.kind], theme="monokai"))
        console.print()


def _print_metadata(metadata: Dict[str, Any]) -> None:
    table = Table(
        title="📊 Generation Metadata", box=box.SIMPLE, show_header=True, header_style="bold cyan"
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")
    for key, value in metadata.items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)


def _print_warnings(warnings: List[str]) -> None:
    if not warnings:
        return
    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in warnings:
        console.print(f"  [yellow]•[/yellow] {escape(warning)}")


def _cmd_validate(args: argparse.Namespace) -> int:
    form = parse_form(_read_json(args.source), strict=not args.permissive)
    schema = compile_form_schema(form)
    submission = _read_json(args.data)

    errors = schema.errors(submission)
    if errors:
        table = Table(title="❌ Validation Errors", box=box.ROUNDED, title_style="bold red")
        table.add_column("Field", style="bold")
        table.add_column("Message", style="red")
        for path, message in errors.items():
            table.add_row(escape(path), escape(message))
        console.print(table)
        return 1

    console.print("[green]✓[/green] Submission is valid")
    if args.show_values:
        sys.stdout.write(json.dumps(schema.validate(submission), indent=2) + "\n")
    return 0


def _cmd_defaults(args: argparse.Namespace) -> int:
    form = parse_form(_read_json(args.source), strict=not args.permissive)
    sys.stdout.write(json.dumps(form_defaults(form), indent=2) + "\n")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    data = _read_json(args.source)
    problems = check_form(data)
    form = parse_form(data, strict=False)
    problems.extend(w for w in collect_warnings(form.fields) if w not in problems)

    if not problems:
        console.print(f"[green]✓[/green] {escape(form.title or 'Form')}: no problems found")
        return 0

    table = Table(title="⚠️  Configuration Problems", box=box.ROUNDED, title_style="bold yellow")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Problem", style="yellow")
    for number, problem in enumerate(problems, 1):
        table.add_row(str(number), escape(problem))
    console.print(table)
    return 1 if args.strict else 0


def _cmd_setup(args: argparse.Namespace) -> int:
    table = Table(title="📦 Required Packages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Package", style="bold green", no_wrap=True)
    table.add_column("Version", style="cyan")
    table.add_column("Description", style="dim")
    for package in REQUIRED_PACKAGES:
        table.add_row(package["name"], package["version"], package["description"])

    console.print(table)
    command = "npm install " + " ".join(
        f"{package['name']}@{package['version']}" for package in REQUIRED_PACKAGES
    )
    console.print(Panel(command, title="💡 Install", border_style="blue"))
    return 0


def _cmd_list_artifacts(args: argparse.Namespace) -> int:
    table = Table(title="📋 Generated Artifacts", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Artifact", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name in get_registry().list_artifacts():
        info = get_artifact_info(name)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
