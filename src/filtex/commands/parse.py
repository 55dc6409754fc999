"""Parse command printing the normalized expression tree."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from filtex import config as config_module
from filtex.expression import FamilyKind, UnsupportedFamilyError, parse_filter_expression
from filtex.output_format import (
    DEFAULT_OUTPUT_THEME,
    OutputFormat,
    OutputFormatError,
    prepare_node_output,
    print_prepared_output,
    resolve_output_format,
)
from filtex.tui import build_console, setup_output


@dataclass
class ParseArgs:
    """Arguments for the parse command."""

    expression: str
    family: str
    config: str
    color_flag: bool | None
    out: str
    out_theme: str


def run_parse(args: ParseArgs) -> None:
    """Run the parse command."""
    color_enabled = setup_output(args)
    console = build_console(color_enabled)
    try:
        output_format = resolve_output_format(args.out)
    except OutputFormatError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        node = parse_filter_expression(args.family, args.expression)
    except UnsupportedFamilyError as exc:
        raise click.UsageError(str(exc)) from exc

    prepared_output = prepare_node_output(node, output_format, color_enabled, args.out_theme)
    print_prepared_output(console, prepared_output)


def register(app: typer.Typer) -> None:
    """Register the parse command."""

    @app.command("parse")
    def parse_command(
        expression: str = typer.Argument(..., metavar="EXPRESSION", help="Filter expression"),
        family: str = typer.Option(
            FamilyKind.NUMBER,
            "--family",
            "-f",
            help="Expression family: number, date or location",
        ),
        config: str = typer.Option(
            config_module.DEFAULT_CONFIG_NAME,
            "--config",
            metavar="FILE",
            help="Config file name to load from current directory",
        ),
        color_flag: bool | None = typer.Option(
            None,
            "--color/--no-color",
            help="Force colored output",
        ),
        out: str = typer.Option(
            OutputFormat.TEXT,
            "--out",
            help="Output format: text or json",
        ),
        out_theme: str = typer.Option(
            DEFAULT_OUTPUT_THEME,
            "--out-theme",
            help="Syntax theme for highlighted output blocks",
        ),
    ) -> None:
        """Parse an expression and print its normalized tree."""
        args = ParseArgs(
            expression=expression,
            family=family,
            config=config,
            color_flag=color_flag,
            out=out,
            out_theme=out_theme,
        )
        config_module.log_applied_config_defaults("parse")
        config_module.log_command_arguments(args, "parse")
        run_parse(args)
