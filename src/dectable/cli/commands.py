"""CLI commands for dectable."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from dectable.combinatorial.space import state_space_size
from dectable.config import DecTableConfig, load_config
from dectable.core.models import Table, condition_to_dict
from dectable.documents import load_table
from dectable.errors import DecTableError, ErrorContext, StateSpaceTooLargeError
from dectable.observability.logging import configure_logging, log_context
from dectable.reporters import ConsoleReporter, MarkdownReporter
from dectable.testing.cases import generate_cases
from dectable.validation import has_fatal, validate

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_ERROR = 2


def _load(ctx: click.Context, table_path: str) -> Table:
    """Load a table and enforce the configured state-space limit.

    Exits with EXIT_ERROR on any load or limit problem.
    """
    config: DecTableConfig = ctx.obj["config"]
    try:
        table = load_table(table_path)
        size = state_space_size(table.model)
        if size > config.max_state_space:
            raise StateSpaceTooLargeError(
                f"State space of {size} conditions exceeds max_state_space "
                f"({config.max_state_space})",
                context=ErrorContext(table_name=table.name, source=table_path),
            )
    except DecTableError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(EXIT_ERROR)
    return table


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """dectable - check decision tables and derive test cases from them."""
    ctx.ensure_object(dict)

    try:
        config_obj = load_config(config)
    except DecTableError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(EXIT_ERROR)

    if verbose:
        config_obj.log_level = "DEBUG"

    configure_logging(level=config_obj.log_level, json_format=config_obj.json_logs)
    ctx.obj["config"] = config_obj
    ctx.obj["console"] = Console()


@cli.command()
@click.argument("table_path", type=click.Path())
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--strict", is_flag=True, help="Fail on advisory problems too")
@click.pass_context
def check(ctx: click.Context, table_path: str, output_format: str, strict: bool) -> None:
    """Validate a table and list every problem found."""
    table = _load(ctx, table_path)

    with log_context(table=table.name):
        diagnostics = validate(table)

    if output_format == "json":
        payload = {
            "table": table.name,
            "sound": not diagnostics,
            "diagnostics": [d.to_dict() for d in diagnostics],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        ConsoleReporter(ctx.obj["console"]).print_diagnostics(table, diagnostics)

    if has_fatal(diagnostics) or (strict and diagnostics):
        sys.exit(EXIT_PROBLEMS)


@cli.command()
@click.argument("table_path", type=click.Path())
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    help="Directory for the generated Markdown (default: beside the table)",
)
@click.pass_context
def document(ctx: click.Context, table_path: str, output_dir: str | None) -> None:
    """Write Markdown documentation for a table."""
    config: DecTableConfig = ctx.obj["config"]
    table = _load(ctx, table_path)

    with log_context(table=table.name):
        diagnostics = validate(table)

    target_dir = Path(output_dir or config.report_dir or Path(table_path).parent)
    target_dir.mkdir(parents=True, exist_ok=True)
    written = MarkdownReporter().save(table, diagnostics, target_dir)

    if diagnostics:
        click.echo(f"Found {len(diagnostics)} problems with table, please see {written}")
    else:
        click.echo(f"Decision table summary available at {written}")


@cli.command()
@click.argument("table_path", type=click.Path())
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def cases(ctx: click.Context, table_path: str, output_format: str) -> None:
    """Print every test case implied by a table."""
    table = _load(ctx, table_path)

    try:
        generated = generate_cases(table)
    except ValueError as e:
        click.echo(f"Cannot generate cases: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if output_format == "json":
        payload = [
            {
                "rule_index": case.rule_index,
                "condition": condition_to_dict(case.condition),
                "action": case.action,
            }
            for case in generated
        ]
        click.echo(json.dumps(payload, indent=2))
    else:
        ConsoleReporter(ctx.obj["console"]).print_cases(table, generated)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
