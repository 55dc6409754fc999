"""Summary command printing a localized description of an expression."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from filtex import config as config_module
from filtex.expression import FamilyKind, UnsupportedFamilyError, summarize
from filtex.expression.locales import DEFAULT_LOCALE


@dataclass
class SummaryArgs:
    """Arguments for the summary command."""

    expression: str
    family: str
    config: str
    locale: str
    field: str | None
    include_field: bool
    quote_advanced: bool


def run_summary(args: SummaryArgs) -> None:
    """Run the summary command."""
    try:
        text = summarize(
            args.family,
            args.expression,
            locale=args.locale,
            field=args.field,
            include_field=args.include_field,
            quote_advanced=args.quote_advanced,
        )
    except UnsupportedFamilyError as exc:
        raise click.UsageError(str(exc)) from exc
    typer.echo(text)


def register(app: typer.Typer) -> None:
    """Register the summary command."""

    @app.command("summary")
    def summary_command(  # noqa: PLR0913
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
        locale: str = typer.Option(
            DEFAULT_LOCALE,
            "--locale",
            "-l",
            help="Locale of the summary, e.g. en, de, fr_FR",
        ),
        field: str | None = typer.Option(
            None,
            "--field",
            metavar="LABEL",
            help="Field label to place in the summary",
        ),
        include_field: bool = typer.Option(
            True,
            "--field-label/--no-field-label",
            help="Include the field label in the summary",
        ),
        quote_advanced: bool = typer.Option(
            False,
            "--quote-advanced",
            help="Quote expressions that could not be parsed",
        ),
    ) -> None:
        """Describe an expression in natural language."""
        args = SummaryArgs(
            expression=expression,
            family=family,
            config=config,
            locale=locale,
            field=field,
            include_field=include_field,
            quote_advanced=quote_advanced,
        )
        config_module.log_applied_config_defaults("summary")
        config_module.log_command_arguments(args, "summary")
        run_summary(args)
