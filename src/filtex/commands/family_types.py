"""Types command listing the node types each expression family produces."""

from __future__ import annotations

import click
import typer

from filtex.expression import FamilyKind, UnsupportedFamilyError, sub_types


def run_types(family: str | None) -> None:
    """Print node types of one family, or of every family."""
    if family is None:
        for kind in FamilyKind:
            typer.echo(f"{kind.value}: {', '.join(sub_types(kind))}")
        return
    try:
        names = sub_types(family)
    except UnsupportedFamilyError as exc:
        raise click.UsageError(str(exc)) from exc
    for name in names:
        typer.echo(name)


def register(app: typer.Typer) -> None:
    """Register the types command."""

    @app.command("types")
    def types_command(
        family: str | None = typer.Argument(
            None, metavar="FAMILY", help="Expression family to list"
        ),
    ) -> None:
        """List the node types an expression family can produce."""
        run_types(family)
